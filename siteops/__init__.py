"""siteops - operations backend for the community website."""

__version__ = "1.0.0"
