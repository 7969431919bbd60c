"""Tests for environment-driven settings."""

from skelgraph.config import Settings
from skelgraph.engine.config import SkeletonConfig


def test_defaults():
    s = Settings()
    assert s.skelgraph_marching_step == 1
    assert s.skelgraph_iso_level == 0.5
    assert s.skelgraph_log_level == "info"


def test_environment_override(monkeypatch):
    monkeypatch.setenv("SKELGRAPH_MARCHING_STEP", "3")
    monkeypatch.setenv("SKELGRAPH_LOG_LEVEL", "debug")
    s = Settings()
    assert s.skelgraph_marching_step == 3
    assert s.skelgraph_log_level == "debug"


def test_skeleton_config_defaults_from_settings():
    config = SkeletonConfig()
    assert config.marching_step == 1
    assert config.with_radii
    assert config.skip_stages == set()
