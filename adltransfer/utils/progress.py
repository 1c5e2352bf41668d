"""Progress reporting and console display for AdlTransfer (adltransfer)."""

import queue
import threading

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from adltransfer.models.transfer import FileProgress, FolderProgress
from adltransfer.utils.helpers import format_percent, format_size

console = Console()

_STOP = object()


def describe_progress(snapshot):
    """Render a progress snapshot as one console line.

    Returns None for snapshots that have not transferred any bytes yet.
    """
    if snapshot.transferred_bytes == 0:
        return None

    percent = format_percent(snapshot.transferred_bytes, snapshot.total_bytes)
    byte_counts = f"{snapshot.transferred_bytes}/{snapshot.total_bytes} bytes"

    if isinstance(snapshot, FolderProgress):
        return (
            f"{percent}%, {snapshot.transferred_files}/{snapshot.total_files} files, "
            f"{byte_counts}"
        )
    if isinstance(snapshot, FileProgress):
        return f"{percent}%, {byte_counts}, {snapshot.segment_count} segment(s)"
    raise TypeError(f"Unsupported progress snapshot: {snapshot!r}")


class ProgressReporter:
    """Prints progress snapshots published from any thread.

    Snapshots are passed through a queue and rendered by a single consumer
    thread, so lines never interleave no matter which engine worker produced
    them.
    """

    def __init__(self, output=None):
        self.console = output or console
        self.latest = None
        self._queue = queue.Queue()
        self._thread = None

    def publish(self, snapshot):
        """Hand a snapshot to the reporter. Safe to call from worker threads."""
        self._queue.put(snapshot)

    def start(self):
        if self._thread is None:
            self._thread = threading.Thread(
                target=self._run, name="adltransfer-progress", daemon=True
            )
            self._thread.start()

    def stop(self):
        """Drain outstanding snapshots and stop the consumer thread."""
        if self._thread is not None:
            self._queue.put(_STOP)
            self._thread.join()
            self._thread = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()

    def render(self, snapshot):
        line = describe_progress(snapshot)
        if line is None:
            return
        self.latest = snapshot
        self.console.print(line, highlight=False)

    def _run(self):
        while True:
            snapshot = self._queue.get()
            if snapshot is _STOP:
                break
            self.render(snapshot)


def display_header(version):
    """Display the application header."""
    console.print(
        Panel(
            f"[bold blue]AdlTransfer {version}[/bold blue]\n"
            "[dim]High-performance uploads and downloads for Azure Data Lake Store[/dim]",
            border_style="blue",
            padding=(0, 2),
        )
    )


def display_transfer_plan(config, verbose=False):
    """Display the source, target and, in verbose mode, the tuning options."""
    plan_table = Table(show_header=False, box=box.SIMPLE)
    plan_table.add_column("Setting", style="bold cyan", no_wrap=True)
    plan_table.add_column("Value", style="white")

    plan_table.add_row("Source", config.source_path)
    plan_table.add_row("Target", config.target_path)
    plan_table.add_row("Account Name", config.account_name)

    if verbose:
        plan_table.add_row("")
        plan_table.add_row("Per File Thread Count", str(config.per_file_thread_count))
        plan_table.add_row("Concurrent File Count", str(config.concurrent_file_count))
        plan_table.add_row("Segment Length", format_size(config.max_segment_length))
        plan_table.add_row("")
        plan_table.add_row("Overwrite", str(config.overwrite))
        plan_table.add_row("Binary", str(config.binary))
        plan_table.add_row("Recursive", str(config.recursive))
        plan_table.add_row("Resume", str(config.resume))
        plan_table.add_row("Metadata", config.metadata_path)

    console.print(plan_table)


def display_operation_summary(stats_obj):
    """Display a summary of the finished transfer."""
    stats = stats_obj.get_stats()
    duration = stats_obj.get_duration()
    transfer_speed = stats_obj.get_transfer_speed_mb_per_sec()

    summary_table = Table(show_header=False, box=box.SIMPLE, pad_edge=False)
    summary_table.add_column("Metric", style="bold cyan", width=25, no_wrap=True)
    summary_table.add_column("Value", style="white", no_wrap=True)

    summary_table.add_row("Total Files", f"[bold]{stats['total_files']}[/bold]")
    summary_table.add_row(
        "Transferred Files",
        f"[bold green]{stats['transferred_files']}[/bold green]",
    )
    if stats["skipped_files"]:
        summary_table.add_row(
            "Skipped (resumed)", f"[bold yellow]{stats['skipped_files']}[/bold yellow]"
        )
    summary_table.add_row(
        "Data Transferred",
        f"[bold green]{format_size(stats['transferred_size'])}[/bold green]",
    )
    summary_table.add_row("Total Size", f"[bold]{format_size(stats['total_size'])}[/bold]")
    summary_table.add_row("Duration", f"[bold]{str(duration).split('.')[0]}[/bold]")
    summary_table.add_row("Speed", f"[bold]{transfer_speed:.2f} MB/s[/bold]")

    console.print(
        Panel(
            summary_table,
            title=f"[bold]{stats_obj.direction} Summary[/bold]",
            border_style="green",
            padding=(1, 2),
        )
    )
