"""ldstore: CRUD data access for JSON-LD documents stored in MongoDB."""

__version__ = "0.1.0"
__author__ = "ldstore Team"

# Submodules are imported explicitly by callers to keep settings lazy
__all__ = ["__version__", "__author__"]
