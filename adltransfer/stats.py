"""Statistics tracking for AdlTransfer (adltransfer)."""

import threading
from datetime import datetime


def _empty_stats():
    return {
        "total_files": 0,
        "transferred_files": 0,
        "skipped_files": 0,
        "total_size": 0,
        "transferred_size": 0,
        "start_time": datetime.now(),
    }


class TransferStats:
    """Thread-safe statistics tracking for upload/download operations."""

    def __init__(self, direction="Upload"):
        self._lock = threading.Lock()
        self.direction = direction
        self.stats = _empty_stats()

    def update(self, **kwargs):
        """Thread-safe method to update statistics."""
        with self._lock:
            for key, value in kwargs.items():
                if key in self.stats:
                    self.stats[key] += value

    def get_stats(self):
        """Get a copy of current statistics."""
        with self._lock:
            return self.stats.copy()

    def get_duration(self):
        """Get operation duration."""
        stats = self.get_stats()
        return datetime.now() - stats["start_time"]

    def get_transfer_speed_mb_per_sec(self):
        """Calculate transfer speed in MB/s."""
        stats = self.get_stats()
        duration = self.get_duration()

        if duration.total_seconds() == 0:
            return 0.0

        mb_transferred = stats["transferred_size"] / 1024 / 1024
        return mb_transferred / duration.total_seconds()
