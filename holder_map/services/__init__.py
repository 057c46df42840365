"""Service modules"""
from .holder_map import HolderMapService
from .session import SessionStore

__all__ = ["HolderMapService", "SessionStore"]
