"""
Mock implementations for testing zigvm components.

This package provides in-memory stand-ins for external tools so the install
pipeline can be tested without ``tar`` or real archives.
"""

from .archive import FakeArchiveTool

__all__ = [
    "FakeArchiveTool",
]
