"""
Transfer Layer.

This package is responsible for moving single files from the server to the
local destination root.
"""

from .downloader import Downloader

__all__ = ["Downloader"]
