"""Pipeline stages, one module per stage; see skelgraph.main.register_stages."""
