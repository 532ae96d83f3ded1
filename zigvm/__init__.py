"""
zigvm - install and switch between multiple Zig toolchain versions.
"""

__version__ = "0.1.0"
