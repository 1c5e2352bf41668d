"""Resume bookkeeping for AdlTransfer (adltransfer)."""

import hashlib
import json
import os
import threading

from adltransfer.core.config import APP_DIR_NAME, LEDGER_DIR_NAME


class TransferLedger:
    """Records which files of a transfer have completed.

    The ledger lives in the metadata directory, one JSON file per
    (direction, account, source, target) combination, and is rewritten after
    every completed file so an interrupted run can be resumed.
    """

    def __init__(self, config):
        self.config = config
        self._lock = threading.Lock()
        self._completed = set()
        self.path = os.path.join(
            config.metadata_path, APP_DIR_NAME, LEDGER_DIR_NAME, f"{self.key}.json"
        )

    @property
    def key(self):
        config = self.config
        if config.download:
            source, target = config.source_path, os.path.abspath(config.target_path)
        else:
            source, target = os.path.abspath(config.source_path), config.target_path
        identity = json.dumps([config.direction, config.account_name, source, target])
        return hashlib.sha256(identity.encode("utf-8")).hexdigest()[:32]

    def load(self):
        """Read previously completed files. A missing ledger means nothing completed."""
        with self._lock:
            self._completed = set()
            if os.path.exists(self.path):
                with open(self.path, "r", encoding="utf-8") as f:
                    self._completed = set(json.load(f).get("completed", []))
            return len(self._completed)

    def is_completed(self, source):
        with self._lock:
            return source in self._completed

    def mark_completed(self, source):
        with self._lock:
            self._completed.add(source)
            self._write()

    def discard(self):
        """Forget the transfer once it has fully succeeded."""
        with self._lock:
            self._completed = set()
            if os.path.exists(self.path):
                os.remove(self.path)

    def _write(self):
        os.makedirs(os.path.dirname(self.path), exist_ok=True)
        data = {
            "direction": self.config.direction,
            "account": self.config.account_name,
            "source": self.config.source_path,
            "target": self.config.target_path,
            "completed": sorted(self._completed),
        }
        temp_path = f"{self.path}.tmp"
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(temp_path, self.path)
