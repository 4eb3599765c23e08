"""lintctl — run every lint domain a project needs behind one command."""

__version__ = "0.1.0"
