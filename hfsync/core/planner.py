"""
Compares manifest records against the local filesystem to decide what to fetch.
"""

import logging
import os
from typing import Iterable

from rich.markup import escape

from hfsync.models.config import SyncSettings
from hfsync.models.manifest import ManifestRecord, SyncPlan
from hfsync.utils.path import resolve_local_path

log = logging.getLogger(__name__)


def is_ignored(path: str, ignore_list: Iterable[str]) -> bool:
    """True if the path starts with any ignore prefix (case-sensitive)."""
    return any(path.startswith(prefix) for prefix in ignore_list)


def dedupe_records(records: Iterable[ManifestRecord]) -> list[ManifestRecord]:
    """Keeps the last record for each path, at the position of that last occurrence."""
    by_path: dict[str, ManifestRecord] = {}
    for record in records:
        by_path.pop(record.path, None)
        by_path[record.path] = record
    return list(by_path.values())


def needs_download(record: ManifestRecord, settings: SyncSettings) -> bool:
    """
    Decides whether one record is missing or stale locally.

    Raises:
        ValueError: If the manifest path is unsafe.
        OSError: If the local file cannot be inspected for a reason other
            than not existing.
    """
    local_path = resolve_local_path(settings.destination_root, record.path)
    try:
        st = os.stat(local_path)
    except FileNotFoundError:
        return True

    if int(st.st_mtime) < int(record.mtime):
        return True
    return settings.refetch_empty_files and st.st_size == 0


def build_plan(records: Iterable[ManifestRecord], settings: SyncSettings) -> SyncPlan:
    """
    Selects the records to download this cycle, in manifest order.

    Ignored paths are never inspected. Records whose local state cannot be
    read are logged and left for the next cycle.
    """
    plan = SyncPlan()
    for record in dedupe_records(records):
        if is_ignored(record.path, settings.ignore_list):
            continue
        try:
            if needs_download(record, settings):
                plan.records.append(record)
        except ValueError as e:
            log.warning(f"[yellow]{escape(str(e))}[/yellow]")
        except OSError as e:
            log.warning(
                f"[yellow]Cannot inspect '{escape(record.path)}', skipping: "
                f"{escape(str(e))}[/yellow]"
            )
    return plan
