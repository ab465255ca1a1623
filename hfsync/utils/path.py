"""
Utilities for mapping manifest paths to local files and server URLs.
"""

from pathlib import Path, PurePosixPath
from urllib.parse import quote

TEMP_SUFFIX = "_TMP"


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)


def resolve_local_path(root: Path, relative_path: str) -> Path:
    """
    Joins a manifest path onto the destination root.

    Raises:
        ValueError: If the path is absolute, names the root itself or climbs
            out of it.
    """
    posix = PurePosixPath(relative_path)
    if not posix.parts or posix.is_absolute() or ".." in posix.parts:
        raise ValueError(f"Refusing unsafe manifest path: {relative_path!r}")
    return root.joinpath(*posix.parts)


def temp_path_for(destination: Path) -> Path:
    """The in-flight sibling a transfer writes to before it is promoted."""
    return destination.with_name(destination.name + TEMP_SUFFIX)


def encode_url_path(relative_path: str) -> str:
    """
    Percent-encodes every segment of a manifest path, keeping '/' as the
    separator and spaces as '%20'.
    """
    return quote(relative_path, safe="/")


def build_file_url(server_url: str, port: int, relative_path: str) -> str:
    """Builds 'server_url:port/<encoded path>'."""
    return f"{server_url}:{port}/{encode_url_path(relative_path)}"
