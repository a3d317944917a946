"""
Task entities.

A task supervises a long-running or batch operation. Tasks live only in
process memory and follow the state machine:

    pending -> running -> success | failed
    pending -> cancelled
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class TaskStatus(str, Enum):
    """Lifecycle status of a task."""

    PENDING = "pending"
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        """True once the task can no longer change status."""
        return self in (TaskStatus.SUCCESS, TaskStatus.FAILED, TaskStatus.CANCELLED)


class TaskType(str, Enum):
    """Kind of operation a task supervises."""

    SCRAPE = "scrape"
    PROCESS = "process"
    REFRESH = "refresh"
    SUPPLEMENT = "supplement"
    FIX_ASSETS = "fix-assets"


@dataclass(frozen=True)
class Task:
    """
    Snapshot of a supervised operation.

    Tasks are immutable: every transition stores a new snapshot built with
    dataclasses.replace, so readers never observe a half-updated record.

    Attributes:
        id: Unique identifier (task_<ms>_<counter>)
        type: Supervised operation
        target: Human readable target (path, batch description)
        status: Lifecycle status
        progress: Completion percentage (0-100)
        logs: Append-only timestamped log lines
        created_at: Creation time (epoch milliseconds)
        started_at: Start time (epoch milliseconds)
        finished_at: End time (epoch milliseconds)
        message: Last status message
        error: Failure message
    """

    id: str
    type: TaskType
    target: str
    status: TaskStatus = TaskStatus.PENDING
    progress: int = 0
    logs: tuple[str, ...] = ()
    created_at: int = 0
    started_at: Optional[int] = None
    finished_at: Optional[int] = None
    message: Optional[str] = None
    error: Optional[str] = None


@dataclass
class TaskStats:
    """Counts of tasks by status, computed on demand."""

    pending: int = 0
    running: int = 0
    success: int = 0
    failed: int = 0
    cancelled: int = 0
    total: int = 0


@dataclass
class BatchProgress:
    """Aggregated progress of a batch."""

    total: int
    done: int
    failed: int
    percent: int = field(default=0)
