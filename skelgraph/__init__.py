"""skelgraph: topological skeletons of discrete shapes."""

__version__ = "0.1.0"
