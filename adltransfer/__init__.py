"""AdlTransfer (adltransfer) - Command line uploads and downloads for Azure Data Lake Store."""

__version__ = "1.0.0"

from .core.auth import DataLakeAuth
from .core.secret import ProtectedSecret, wrap
from .services.transfer import DataLakeTransfer
from .stats import TransferStats

__all__ = [
    "DataLakeAuth",
    "DataLakeTransfer",
    "ProtectedSecret",
    "TransferStats",
    "wrap",
]
