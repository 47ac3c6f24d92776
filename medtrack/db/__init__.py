"""
Database init - Exports for storage
"""

from .base import Base, TimestampMixin

__all__ = ["Base", "TimestampMixin"]
