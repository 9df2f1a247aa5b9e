from dataclasses import asdict, dataclass, field
from enum import Enum

from altseo.documents.models import DocumentId

STOPPED_PERCENTAGE = -1
COMPLETE_PERCENTAGE = 100


class JobKind(str, Enum):
    """Bulk operations, each with independently persisted state."""

    KEYWORDS = "keywords"
    ALT = "alt"


class StepStatus(str, Enum):
    PROGRESS = "progress"
    COMPLETE = "complete"
    STOPPED = "stopped"
    BUSY = "busy"
    ERROR = "error"


@dataclass
class BulkJobState:
    """Persisted state of one job kind, rebuilt from the store on every step."""

    queue: list[DocumentId] = field(default_factory=list)
    total: int = 0
    lock: float | None = None
    stopped: bool = False

    @property
    def remaining(self) -> int:
        return len(self.queue)

    @property
    def processed(self) -> int:
        return self.total - self.remaining


@dataclass(frozen=True)
class StepResult:
    """Outcome of one step, as reported to the polling caller."""

    status: StepStatus
    percentage: int
    message: str
    document_id: DocumentId | None = None

    @property
    def success(self) -> bool:
        return self.status in (StepStatus.PROGRESS, StepStatus.COMPLETE, StepStatus.STOPPED)

    @property
    def finished(self) -> bool:
        """True when the caller should stop polling."""
        return self.status in (StepStatus.COMPLETE, StepStatus.STOPPED)

    def to_dict(self) -> dict[str, object]:
        return {
            "success": self.success,
            "percentage": self.percentage,
            "message": self.message,
        }


@dataclass(frozen=True)
class StopResult:
    success: bool

    def to_dict(self) -> dict[str, object]:
        return {"success": self.success}


@dataclass(frozen=True)
class BulkStatus:
    """Read-only progress snapshot of a job kind."""

    kind: str
    running: bool
    total: int
    remaining: int
    percentage: int
    locked: bool
    stop_requested: bool

    def to_dict(self) -> dict[str, object]:
        return asdict(self)
