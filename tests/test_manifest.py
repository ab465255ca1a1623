"""Tests for manifest parsing and fetching."""

import csv
from pathlib import Path

import pytest

from hfsync.api.rate_limiter import TickThrottle
from hfsync.core.manifest import ManifestFetcher, load_manifest, parse_manifest
from hfsync.exceptions import ManifestError
from hfsync.models.manifest import ManifestRecord
from hfsync.transfer.downloader import Downloader
from tests.fakes import FakeClient


def test_parse_basic_rows() -> None:
    records = parse_manifest(["a.txt,1000,10\n", "dir/b.bin,1500.75,2048\n"])
    assert records == [
        ManifestRecord("a.txt", 1000.0, 10),
        ManifestRecord("dir/b.bin", 1500.75, 2048),
    ]


def test_parse_ignores_extra_fields_and_blank_rows() -> None:
    records = parse_manifest(["a.txt,1,2,deadbeef,extra\n", "\n", "b.txt,3,4\n"])
    assert [r.path for r in records] == ["a.txt", "b.txt"]


def test_parse_quoted_path_with_comma() -> None:
    records = parse_manifest(['"x, y.txt",5,6\n'])
    assert records == [ManifestRecord("x, y.txt", 5.0, 6)]


def test_parse_skips_short_and_non_numeric_rows(caplog) -> None:
    records = parse_manifest(
        ["path,mtime,size\n", "only-two,1\n", "good.txt,7,8\n", "bad.txt,7,huge\n"]
    )
    assert records == [ManifestRecord("good.txt", 7.0, 8)]
    assert "line 2" in caplog.text


def test_parse_skips_non_finite_mtime_and_negative_size(caplog) -> None:
    records = parse_manifest(
        [
            "a.txt,1e400,1\n",
            "b.txt,inf,1\n",
            "c.txt,nan,1\n",
            "d.txt,1000,-5\n",
            "e.txt,1000,1\n",
        ]
    )
    assert records == [ManifestRecord("e.txt", 1000.0, 1)]
    for line in range(1, 5):
        assert f"line {line}" in caplog.text


def test_parse_warning_renders_bracketed_path(rich_log) -> None:
    assert parse_manifest(["[/x],soon,1\n"]) == []
    assert "bad mtime or size for '[/x]'" in rich_log()


def test_parse_keeps_duplicates_for_the_planner() -> None:
    records = parse_manifest(["a,1,1\n", "a,2,2\n"])
    assert len(records) == 2


def test_parse_malformed_csv_is_fatal() -> None:
    oversized = "x" * (csv.field_size_limit() + 1)
    with pytest.raises(ManifestError, match="Malformed"):
        parse_manifest([f"{oversized},1,2\n"])


def test_load_manifest_unreadable(tmp_path: Path) -> None:
    with pytest.raises(ManifestError):
        load_manifest(tmp_path / "missing.csv")


def test_load_manifest_undecodable(tmp_path: Path) -> None:
    path = tmp_path / "files.csv"
    path.write_bytes(b"\xff\xfe\x00bad")
    with pytest.raises(ManifestError):
        load_manifest(path)


def _fetcher(client: FakeClient, root: Path) -> ManifestFetcher:
    downloader = Downloader(
        client, root, 1000, throttle_factory=lambda: TickThrottle(interval=0)
    )
    return ManifestFetcher(downloader, "files.csv")


@pytest.mark.asyncio
async def test_fetch_downloads_and_parses(tmp_path: Path) -> None:
    client = FakeClient({"files.csv": b"a.txt,1000,10\nsecrets/key,2000,5\n"})
    records = await _fetcher(client, tmp_path).fetch()
    assert [r.path for r in records] == ["a.txt", "secrets/key"]
    assert client.requests == ["files.csv"]
    assert (tmp_path / "files.csv").is_file()


@pytest.mark.asyncio
async def test_fetch_failure_is_a_manifest_error(tmp_path: Path) -> None:
    with pytest.raises(ManifestError, match="404"):
        await _fetcher(FakeClient(), tmp_path).fetch()
