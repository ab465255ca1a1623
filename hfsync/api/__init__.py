"""
File Server API Layer.

This package handles identity, authentication and paced HTTP access to the
sync server.
"""

from .auth import build_basic_auth, derive_credential
from .client import FileServerClient
from .rate_limiter import TickThrottle

__all__ = ["FileServerClient", "TickThrottle", "build_basic_auth", "derive_credential"]
