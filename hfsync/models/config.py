"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

# Aggregate speed is configured in KB/s; 1 KB is 1000 bytes on the wire.
SPEED_UNIT_BYTES = 1000

DEFAULT_MANIFEST_NAME = "files.csv"

AUTH_ORDERS = ("credential_first", "account_first")


class SyncSettings(BaseModel):
    """A validated, read-only configuration for one hfsync process."""

    # [user]
    account_name: str = ""

    # [server]
    server_url: str
    server_port: int = 80
    download_speed: int = 1000

    # [files]
    check_time: int = 21600
    ignore_list: list[str] = Field(default_factory=list)
    download_folder: str

    # [sync]
    worker_count: int = 3
    auth_order: Literal["credential_first", "account_first"] = "credential_first"
    refetch_empty_files: bool = False
    show_progress: bool = True
    manifest_name: str = DEFAULT_MANIFEST_NAME

    class Config:
        """Pydantic model configuration."""

        frozen = True
        str_strip_whitespace = True

    @field_validator("account_name")
    @classmethod
    def validate_account_name(cls, v: str) -> str:
        """Basic auth cannot carry a colon in the login half of the pair."""
        if ":" in v:
            raise ValueError("Account name cannot contain ':'.")
        return v

    @field_validator("server_url")
    @classmethod
    def validate_server_url(cls, v: str) -> str:
        """Ensures the server URL has a scheme and no trailing slash."""
        if not v:
            raise ValueError("Server URL cannot be empty.")
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Server URL must start with http:// or https://, got: {v}")
        return v.rstrip("/")

    @field_validator("server_port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 1 <= v <= 65535:
            raise ValueError("Server port must be between 1 and 65535.")
        return v

    @field_validator("download_speed")
    @classmethod
    def validate_speed(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Download speed must be at least 1 KB/s.")
        return v

    @field_validator("worker_count")
    @classmethod
    def validate_workers(cls, v: int) -> int:
        """Ensures a reasonable number of workers."""
        if v < 1 or v > 32:
            raise ValueError("Worker count must be between 1 and 32.")
        return v

    @field_validator("ignore_list")
    @classmethod
    def validate_ignore_list(cls, v: list[str]) -> list[str]:
        # An empty prefix would match every path.
        return [prefix for prefix in v if prefix]

    @field_validator("download_folder")
    @classmethod
    def validate_download_folder(cls, v: str) -> str:
        if not v:
            raise ValueError(
                "Download folder not defined, please edit the config file."
            )
        return v

    @field_validator("manifest_name")
    @classmethod
    def validate_manifest_name(cls, v: str) -> str:
        if not v or v.startswith("/") or ".." in v.split("/"):
            raise ValueError("Manifest name must be a relative path on the server.")
        return v

    @property
    def rate_per_worker(self) -> int:
        """Per-transfer byte cap per second: the aggregate cap split evenly."""
        return max(1, self.download_speed * SPEED_UNIT_BYTES // self.worker_count)

    @property
    def destination_root(self) -> Path:
        return Path(self.download_folder).expanduser()

    @property
    def runs_once(self) -> bool:
        return self.check_time < 1

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that may be set from the INI file."""
        return set(cls.model_fields)
