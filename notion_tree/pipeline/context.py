"""
Pipeline - Traversal Context

Per-run state threaded through every recursive expansion call.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from notion_tree.pipeline.progress import NullProgressReporter, ProgressReporter


logger = logging.getLogger(__name__)

# Emit a node-count event every N visited nodes
PROGRESS_SAMPLE_EVERY = 5


@dataclass
class BranchFailure:
    """A subtree whose listing call failed and was truncated to a leaf."""
    item_id: str
    kind: str
    message: str


@dataclass
class TraversalContext:
    """Counters, options and the progress handle for one traversal."""
    max_depth: Optional[int] = None
    include_urls: bool = False
    reporter: ProgressReporter = field(default_factory=NullProgressReporter)
    nodes_visited: int = 0
    roots_done: int = 0
    roots_total: int = 0
    failures: List[BranchFailure] = field(default_factory=list)

    def at_depth_limit(self, depth: int) -> bool:
        return self.max_depth is not None and depth >= self.max_depth

    def visit(self) -> None:
        self.nodes_visited += 1
        if self.nodes_visited % PROGRESS_SAMPLE_EVERY == 0:
            self.emit("nodes_visited", self.nodes_visited)

    def record_failure(self, item_id: str, kind: str, error: Exception) -> None:
        self.failures.append(BranchFailure(item_id=item_id, kind=kind, message=str(error)))

    def emit(self, event: str, *args) -> None:
        """Forward an event to the reporter. Reporter errors never reach the traversal."""
        try:
            getattr(self.reporter, event)(*args)
        except Exception:
            logger.debug("Progress reporter failed on %s", event, exc_info=True)
