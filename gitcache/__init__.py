"""git-cache: a shared bare repository that working clones borrow objects from."""

__version__ = "0.3.0"
