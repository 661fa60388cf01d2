from concurrent.futures import Future
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
import traceback
from typing import Any, Dict, List, Literal, Optional
import uuid

from pydantic import BaseModel, ConfigDict, Field


Level = Literal["fatal", "error", "warning", "info", "debug"]


def _event_id() -> str:
    return uuid.uuid4().hex


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S")


class Event(BaseModel):
    """
    A single error or message occurrence, as accepted by the store endpoint.
    """

    model_config = ConfigDict(extra="allow")

    event_id: str = Field(default_factory=_event_id)
    timestamp: str = Field(default_factory=_utc_timestamp)
    level: Level = "error"
    message: Optional[str] = None
    platform: str = "python"
    logger: Optional[str] = None
    culprit: Optional[str] = None
    server_name: Optional[str] = None
    environment: Optional[str] = None
    release: Optional[str] = None
    tags: Dict[str, str] = Field(default_factory=dict)
    extra: Dict[str, Any] = Field(default_factory=dict)
    fingerprint: List[str] = Field(default_factory=lambda: ["{{ default }}"])
    exception: Optional[List[Dict[str, Any]]] = None

    @classmethod
    def from_exception(cls, exc: BaseException, **kwargs: Any) -> "Event":
        """
        Build an event describing a raised exception.

        Args:
            exc: The exception, ideally with its traceback attached.
            **kwargs: Any other Event field.

        Returns:
            Event: The event, with the innermost frame as culprit.
        """
        frames = [
            {
                "filename": frame.filename,
                "function": frame.name,
                "lineno": frame.lineno,
                "context_line": frame.line,
            }
            for frame in traceback.extract_tb(exc.__traceback__)
        ]
        exc_type = type(exc)

        kwargs.setdefault("message", f"({exc_type.__name__}) {exc}")
        if frames:
            kwargs.setdefault("culprit", f"{frames[-1]['filename']} in {frames[-1]['function']}")

        return cls(
            exception=[
                {
                    "type": exc_type.__name__,
                    "value": str(exc),
                    "module": exc_type.__module__,
                    "stacktrace": {"frames": frames},
                }
            ],
            **kwargs,
        )


class DispatchMode(str, Enum):
    """
    How `send` hands back the outcome of a delivery.
    """

    SYNC = "sync"
    ASYNC = "async"
    NONE = "none"


class SendStatus(str, Enum):
    OK = "ok"
    ERROR = "error"
    UNSAMPLED = "unsampled"
    PENDING = "pending"


@dataclass(frozen=True)
class SendResult:
    """
    Outcome of one `send` call.

    A pending result carries the future of the detached delivery, which
    resolves to an ok or error result.
    """

    status: SendStatus
    event_id: Optional[str] = None
    future: Optional["Future[SendResult]"] = field(
        default=None, compare=False, repr=False
    )

    @classmethod
    def ok(cls, event_id: Optional[str]) -> "SendResult":
        return cls(status=SendStatus.OK, event_id=event_id)

    @classmethod
    def error(cls) -> "SendResult":
        return cls(status=SendStatus.ERROR)

    @classmethod
    def unsampled(cls) -> "SendResult":
        return cls(status=SendStatus.UNSAMPLED)

    @classmethod
    def pending(cls, future: "Future[SendResult]") -> "SendResult":
        return cls(status=SendStatus.PENDING, future=future)

    @property
    def succeeded(self) -> bool:
        return self.status is SendStatus.OK

    def wait(self, timeout: Optional[float] = None) -> "SendResult":
        """
        Block until a pending result resolves.

        Non-pending results are returned as they are.

        Raises:
            concurrent.futures.TimeoutError: If the delivery is still running
                after ``timeout`` seconds.
        """
        if self.future is None:
            return self

        return self.future.result(timeout=timeout)
