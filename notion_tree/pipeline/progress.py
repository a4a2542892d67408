"""
Pipeline - Progress Reporting

Progress events emitted during a traversal. Reporters are purely
observational: the tree is the same whichever reporter is used.
"""

from abc import ABC, abstractmethod
from typing import Optional

from rich.console import Console
from rich.status import Status
from rich.text import Text


class ProgressReporter(ABC):
    """Base class for progress reporter implementations."""

    @abstractmethod
    def discovery_started(self) -> None:
        pass

    @abstractmethod
    def discovery_progress(self, pages: int, databases: int) -> None:
        """Search results seen so far, before the workspace filter."""
        pass

    @abstractmethod
    def discovery_finished(self, root_count: int) -> None:
        pass

    @abstractmethod
    def expansion_started(self, total: int) -> None:
        pass

    @abstractmethod
    def root_started(self, index: int, total: int, title: str) -> None:
        """index is 1-based."""
        pass

    @abstractmethod
    def root_completed(self, done: int, total: int) -> None:
        pass

    @abstractmethod
    def nodes_visited(self, count: int) -> None:
        pass

    @abstractmethod
    def status(self, message: str) -> None:
        pass

    @abstractmethod
    def finished(self, node_count: int) -> None:
        pass

    def stop(self) -> None:
        """Tear down any live display (called on errors and interrupts)."""
        return None


class NullProgressReporter(ProgressReporter):
    """Quiet mode."""

    def discovery_started(self):
        pass

    def discovery_progress(self, pages, databases):
        pass

    def discovery_finished(self, root_count):
        pass

    def expansion_started(self, total):
        pass

    def root_started(self, index, total, title):
        pass

    def root_completed(self, done, total):
        pass

    def nodes_visited(self, count):
        pass

    def status(self, message):
        pass

    def finished(self, node_count):
        pass


class SpinnerProgressReporter(ProgressReporter):
    """
    Terminal spinner with a "[done/total, pct%]" prefix.

    Discovery and expansion each run their own spinner; summary lines are
    printed between them.
    """

    def __init__(self, console: Optional[Console] = None, spinner: str = "dots"):
        self.console = console or Console(stderr=True)
        self.spinner = spinner
        self._status: Optional[Status] = None
        self._message = ""
        self._done = 0
        self._total = 0

    def _start(self, message: str) -> None:
        self.stop()
        self._message = message
        self._status = self.console.status(self._render(), spinner=self.spinner)
        self._status.start()

    def _render(self) -> Text:
        text = Text()
        if self._total > 0:
            percentage = round(self._done / self._total * 100)
            text.append(f"[{self._done}/{self._total}, {percentage}%] ")
        text.append(self._message)
        return text

    def _refresh(self) -> None:
        if self._status is not None:
            self._status.update(self._render())

    def stop(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def discovery_started(self):
        self._done = self._total = 0
        self._start("Searching for workspace pages and databases...")

    def discovery_progress(self, pages, databases):
        self.status(f"Found {pages} pages and {databases} databases...")

    def discovery_finished(self, root_count):
        self.stop()
        self.console.print(
            f"Found {root_count} root items. Building tree structure...",
            style="blue",
        )

    def expansion_started(self, total):
        self._done, self._total = 0, total
        self._start("Building tree structure...")

    def root_started(self, index, total, title):
        self._total = total
        self.status(f"Processing {title}...")

    def root_completed(self, done, total):
        self._done, self._total = done, total
        self._refresh()

    def nodes_visited(self, count):
        self.status(f"Building tree... ({count} nodes processed)")

    def status(self, message):
        self._message = message
        self._refresh()

    def finished(self, node_count):
        self.stop()
        self.console.print(
            f"Tree structure built successfully! ({node_count} nodes)",
            style="blue",
        )
