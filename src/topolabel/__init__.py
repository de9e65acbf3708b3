"""topolabel: collision avoidance for map label placement."""

__version__ = "0.1.0"
