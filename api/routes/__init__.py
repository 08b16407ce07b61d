"""API route modules."""
from api.routes import quiz_files

__all__ = ["quiz_files"]
