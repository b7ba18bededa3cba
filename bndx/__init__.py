"""bnd eXplorer — dependency questions about a bnd workspace."""

__version__ = "0.8.0"
