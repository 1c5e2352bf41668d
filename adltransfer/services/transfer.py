"""Upload and download orchestration for AdlTransfer (adltransfer)."""

import logging
import math
import os
import posixpath
import threading
from concurrent.futures import ThreadPoolExecutor

from azure.datalake.store import multithread

from adltransfer.exceptions import TransferError
from adltransfer.models.transfer import FileProgress, FolderProgress, TransferItem
from adltransfer.services.ledger import TransferLedger
from adltransfer.stats import TransferStats
from adltransfer.utils.helpers import truncate_path

logger = logging.getLogger(__name__)

# Size of the engine's read/write buffers, capped by the segment length
BLOCK_SIZE = 4 * 1024 * 1024


class DataLakeTransfer:
    """Runs an upload or download through the Azure Data Lake Store transfer engine.

    Every file is handed to an ``ADLUploader``/``ADLDownloader`` using
    ``per_file_thread_count`` threads and segments of ``max_segment_length``
    bytes; up to ``concurrent_file_count`` files are in flight at once.
    Progress snapshots are published to ``progress`` from the engine's
    worker threads.
    """

    def __init__(
        self,
        config,
        filesystem,
        progress=None,
        uploader_factory=None,
        downloader_factory=None,
    ):
        self.config = config
        self.filesystem = filesystem
        self.progress = progress
        self.uploader_factory = uploader_factory or multithread.ADLUploader
        self.downloader_factory = downloader_factory or multithread.ADLDownloader
        self.stats = TransferStats(config.direction)
        self.ledger = TransferLedger(config)

        self._lock = threading.Lock()
        self._single_file = False
        self._file_bytes = {}
        self._total_bytes = 0
        self._total_files = 0
        self._finished_files = 0

    def collect_items(self):
        """Resolve the source path into the list of files to transfer."""
        if self.config.download:
            return self._collect_remote()
        return self._collect_local()

    def _collect_local(self):
        source = self.config.source_path
        target = self.config.target_path

        if os.path.isfile(source):
            self._single_file = True
            return [TransferItem(source, target, os.path.getsize(source))]

        items = []
        for root, dirs, files in os.walk(source):
            relative_dir = os.path.relpath(root, source)
            remote_dir = target
            if relative_dir != ".":
                remote_dir = posixpath.join(target, relative_dir.replace(os.sep, "/"))

            for filename in sorted(files):
                local_path = os.path.join(root, filename)
                items.append(
                    TransferItem(
                        local_path,
                        posixpath.join(remote_dir, filename),
                        os.path.getsize(local_path),
                    )
                )

            if not self.config.recursive:
                break
            dirs.sort()

        return items

    def _collect_remote(self):
        source = self.config.source_path
        target = self.config.target_path

        info = self.filesystem.info(source)
        if info["type"] == "FILE":
            self._single_file = True
            if os.path.isdir(target):
                target = os.path.join(target, posixpath.basename(source.rstrip("/")))
            return [TransferItem(source, target, info["length"])]

        if self.config.recursive:
            entries = self.filesystem.walk(source, details=True)
        else:
            entries = self.filesystem.ls(source, detail=True)

        remote_root = "/" + source.strip("/")
        items = []
        for entry in sorted(entries, key=lambda e: e["name"]):
            if entry["type"] != "FILE":
                continue
            remote_path = "/" + entry["name"].lstrip("/")
            relative_path = posixpath.relpath(remote_path, remote_root)
            items.append(
                TransferItem(
                    remote_path,
                    os.path.join(target, *relative_path.split("/")),
                    entry["length"],
                )
            )
        return items

    def execute(self):
        """Transfer every pending file. Blocks until all files have finished.

        Raises TransferError when the engine reports an unsuccessful file;
        engine exceptions propagate unchanged.
        """
        items = self.collect_items()

        if self.config.resume:
            done = self.ledger.load()
            logger.debug("Loaded %d completed file(s) from %s", done, self.ledger.path)
        else:
            self.ledger.discard()

        pending = [item for item in items if not self.ledger.is_completed(item.source)]
        skipped = [item for item in items if self.ledger.is_completed(item.source)]

        self._total_files = len(items)
        self._total_bytes = sum(item.size for item in items)
        self._finished_files = len(skipped)
        self._file_bytes = {item.source: item.size for item in skipped}
        self.stats.update(
            total_files=len(items),
            total_size=self._total_bytes,
            skipped_files=len(skipped),
        )

        if not pending:
            logger.debug("Nothing left to transfer")
        else:
            workers = min(self.config.concurrent_file_count, len(pending))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [executor.submit(self._transfer_item, item) for item in pending]

                for future in futures:
                    try:
                        future.result()
                    except Exception:
                        for other in futures:
                            other.cancel()
                        raise

        self.ledger.discard()
        return self.stats

    def _transfer_item(self, item):
        config = self.config
        segment_length = config.max_segment_length
        block_size = min(BLOCK_SIZE, segment_length)

        def progress_callback(current, total):
            self._on_progress(item, current)

        if config.download:
            factory = self.downloader_factory
            rpath, lpath = item.source, item.target
            local_dir = os.path.dirname(lpath)
            if local_dir:
                os.makedirs(local_dir, exist_ok=True)
        else:
            factory = self.uploader_factory
            rpath, lpath = item.target, item.source

        engine = factory(
            self.filesystem,
            rpath=rpath,
            lpath=lpath,
            nthreads=config.per_file_thread_count,
            chunksize=segment_length,
            buffersize=block_size,
            blocksize=block_size,
            overwrite=config.overwrite or config.resume,
            progress_callback=progress_callback,
            run=False,
        )
        engine.run()

        if not engine.successful():
            raise TransferError(
                f"{config.direction} of '{item.source}' did not complete successfully."
            )

        self.ledger.mark_completed(item.source)
        self.stats.update(transferred_files=1, transferred_size=item.size)
        with self._lock:
            self._finished_files += 1
            self._file_bytes[item.source] = item.size
        logger.debug("Finished %s", truncate_path(item.source, 60))
        self._publish()

    def _on_progress(self, item, current):
        with self._lock:
            self._file_bytes[item.source] = current
        self._publish()

    def _publish(self):
        if self.progress is None:
            return

        with self._lock:
            transferred = sum(self._file_bytes.values())
            finished = self._finished_files

        if self._single_file:
            segments = max(1, math.ceil(self._total_bytes / self.config.max_segment_length))
            snapshot = FileProgress(transferred, self._total_bytes, segments)
        else:
            snapshot = FolderProgress(
                transferred, self._total_bytes, finished, self._total_files
            )
        self.progress.publish(snapshot)
