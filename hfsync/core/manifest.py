"""
Fetches and parses the remote file index.
"""

import asyncio
import csv
import logging
import math
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from rich.markup import escape

from hfsync.exceptions import HfsyncError, ManifestError
from hfsync.models.manifest import ManifestRecord

if TYPE_CHECKING:
    from hfsync.transfer.downloader import Downloader

log = logging.getLogger(__name__)

MIN_FIELDS = 3


def parse_manifest(lines: Iterable[str]) -> list[ManifestRecord]:
    """
    Parses CSV rows of (path, mtime, size[, ...]) into records.

    Extra trailing fields are ignored. Blank rows are skipped; rows that are
    too short or carry non-numeric, non-finite or negative values are logged
    and skipped.

    Raises:
        ManifestError: If the CSV itself cannot be read.
    """
    records = []
    reader = csv.reader(lines)
    try:
        for row in reader:
            if not row:
                continue
            if len(row) < MIN_FIELDS:
                log.warning(
                    f"[yellow]Skipping manifest line {reader.line_num}: "
                    f"expected at least {MIN_FIELDS} fields, got {len(row)}[/yellow]"
                )
                continue
            path, raw_mtime, raw_size = row[0], row[1], row[2]
            try:
                mtime = float(raw_mtime)
                size = int(raw_size)
            except ValueError:
                mtime, size = math.nan, -1
            if not math.isfinite(mtime) or size < 0:
                log.warning(
                    f"[yellow]Skipping manifest line {reader.line_num}: "
                    f"bad mtime or size for '{escape(path)}'[/yellow]"
                )
                continue
            records.append(ManifestRecord(path=path, mtime=mtime, size=size))
    except csv.Error as e:
        raise ManifestError(f"Malformed file index at line {reader.line_num}: {e}") from e
    return records


def load_manifest(manifest_path: Path) -> list[ManifestRecord]:
    """Reads and parses a manifest file from disk."""
    try:
        with open(manifest_path, "r", encoding="utf-8", newline="") as f:
            return parse_manifest(f)
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"Could not read file index {manifest_path}: {e}") from e


class ManifestFetcher:
    """Downloads the file index through the regular downloader and parses it."""

    def __init__(self, downloader: "Downloader", manifest_name: str):
        self.downloader = downloader
        self.manifest_name = manifest_name

    async def fetch(self) -> list[ManifestRecord]:
        """
        Returns the current remote manifest.

        Raises:
            ManifestError: If the index cannot be downloaded or parsed.
        """
        log.info("Downloading file index ...")
        try:
            manifest_path = await self.downloader.download(self.manifest_name)
        except HfsyncError as e:
            raise ManifestError(f"Could not download file index: {e}") from e

        records = await asyncio.to_thread(load_manifest, manifest_path)
        log.debug(f"File index lists {len(records)} entries")
        return records
