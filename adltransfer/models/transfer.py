"""Transfer models for AdlTransfer (adltransfer)."""

from dataclasses import dataclass
from typing import Optional

from adltransfer.core.config import (
    COMMON_TENANT,
    DEFAULT_CONCURRENT_FILES,
    DEFAULT_PER_FILE_THREADS,
    DEFAULT_SEGMENT_LENGTH,
    default_metadata_path,
)
from adltransfer.core.secret import ProtectedSecret


@dataclass(frozen=True)
class TransferConfiguration:
    """Options of a single upload or download, created once from the command line."""

    source_path: str
    target_path: str
    account_name: str
    per_file_thread_count: int = DEFAULT_PER_FILE_THREADS
    concurrent_file_count: int = DEFAULT_CONCURRENT_FILES
    overwrite: bool = False
    resume: bool = False
    binary: bool = False
    recursive: bool = False
    download: bool = False
    max_segment_length: int = DEFAULT_SEGMENT_LENGTH
    metadata_path: str = ""

    def __post_init__(self):
        if not self.metadata_path:
            object.__setattr__(self, "metadata_path", default_metadata_path())

    @property
    def direction(self) -> str:
        return "Download" if self.download else "Upload"


@dataclass(frozen=True)
class Credentials:
    """Azure Active Directory user or service principal credentials."""

    user_name: Optional[str] = None
    secret: Optional[ProtectedSecret] = None
    tenant_id: Optional[str] = None
    is_service_principal: bool = False

    @property
    def tenant(self) -> str:
        """The tenant to authenticate against, falling back to the common tenant."""
        return self.tenant_id or COMMON_TENANT

    @property
    def has_secret(self) -> bool:
        return self.secret is not None and len(self.secret) > 0


@dataclass(frozen=True)
class TransferItem:
    """A single file resolved from the source path."""

    source: str
    target: str
    size: int


@dataclass(frozen=True)
class FileProgress:
    """Progress of a single-file transfer."""

    transferred_bytes: int
    total_bytes: int
    segment_count: int


@dataclass(frozen=True)
class FolderProgress:
    """Progress of a folder transfer."""

    transferred_bytes: int
    total_bytes: int
    transferred_files: int
    total_files: int
