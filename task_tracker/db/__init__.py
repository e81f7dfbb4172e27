"""Database package."""

from .client import TaskStore

__all__ = ["TaskStore"]
