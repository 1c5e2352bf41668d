"""
Pytest configuration and shared fixtures for AdlTransfer tests.

Provides fake stand-ins for the Data Lake Store file system and the
ADLUploader/ADLDownloader engine so transfers can be exercised offline.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from adltransfer.core.config import ENV_PASSWORD, ENV_TENANT_ID, ENV_USER


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep credentials from the developer's shell out of the tests."""
    for name in (ENV_USER, ENV_PASSWORD, ENV_TENANT_ID):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def metadata_dir(tmp_path: Path) -> Path:
    """Provide an empty metadata directory."""
    path = tmp_path / "metadata"
    path.mkdir()
    return path


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """
    Provide a local folder with nested files.

    Layout::

        source/a.txt        (10 bytes)
        source/b.txt        (20 bytes)
        source/sub/c.txt    (30 bytes)
    """
    root = tmp_path / "source"
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_bytes(b"a" * 10)
    (root / "b.txt").write_bytes(b"b" * 20)
    (root / "sub" / "c.txt").write_bytes(b"c" * 30)
    return root


class RecordingProgress:
    """Collects published snapshots."""

    def __init__(self) -> None:
        self.snapshots: list = []

    def publish(self, snapshot) -> None:
        self.snapshots.append(snapshot)


@pytest.fixture
def recording_progress() -> RecordingProgress:
    return RecordingProgress()


class FakeFileSystem:
    """Minimal AzureDLFileSystem replacement backed by a dict of remote files."""

    def __init__(self, files: dict[str, int]) -> None:
        self.files = {"/" + name.lstrip("/"): size for name, size in files.items()}
        self.calls: list[str] = []

    def _entry(self, path: str) -> dict:
        if path in self.files:
            return {"name": path.lstrip("/"), "type": "FILE", "length": self.files[path]}
        return {"name": path.lstrip("/"), "type": "DIRECTORY", "length": 0}

    def info(self, path: str) -> dict:
        path = "/" + path.strip("/")
        if path in self.files:
            return self._entry(path)
        if any(name.startswith(path + "/") for name in self.files):
            return self._entry(path)
        raise FileNotFoundError(path)

    def ls(self, path: str, detail: bool = False) -> list:
        self.calls.append("ls")
        prefix = "/" + path.strip("/") + "/"
        children = set()
        for name in self.files:
            if name.startswith(prefix):
                head = name[len(prefix):].split("/")[0]
                children.add(prefix + head)
        return [self._entry(child) for child in sorted(children)]

    def walk(self, path: str, details: bool = False) -> list:
        self.calls.append("walk")
        prefix = "/" + path.strip("/") + "/"
        return [self._entry(name) for name in sorted(self.files) if name.startswith(prefix)]


@pytest.fixture
def fake_filesystem() -> type[FakeFileSystem]:
    return FakeFileSystem


class FakeEngine:
    """Stands in for ADLUploader/ADLDownloader and records how it was built."""

    def __init__(self, recorder: "EngineRecorder", adlfs, rpath, lpath, **kwargs) -> None:
        self.recorder = recorder
        self.adlfs = adlfs
        self.rpath = rpath
        self.lpath = lpath
        self.kwargs = kwargs
        self._successful = recorder.successful and (
            recorder.fail_after is None or len(recorder.engines) < recorder.fail_after
        )
        recorder.engines.append(self)

    def successful(self) -> bool:
        return self._successful

    def run(self) -> None:
        if self.recorder.error is not None:
            raise self.recorder.error
        if self.recorder.download:
            size = self.adlfs.files["/" + self.rpath.lstrip("/")]
            Path(self.lpath).write_bytes(b"x" * size)
        else:
            size = os.path.getsize(self.lpath)
        callback = self.kwargs["progress_callback"]
        callback(0, size)
        callback(size // 2, size)
        callback(size, size)


class EngineRecorder:
    """Factory for FakeEngine instances."""

    def __init__(self, download: bool = False) -> None:
        self.download = download
        self.engines: list[FakeEngine] = []
        self.successful = True
        self.error: Exception | None = None
        self.fail_after: int | None = None

    def __call__(self, adlfs, rpath, lpath, **kwargs) -> FakeEngine:
        return FakeEngine(self, adlfs, rpath, lpath, **kwargs)


@pytest.fixture
def uploader() -> EngineRecorder:
    return EngineRecorder()


@pytest.fixture
def downloader() -> EngineRecorder:
    return EngineRecorder(download=True)
