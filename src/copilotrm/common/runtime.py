"""Injected runtime services: identifiers, time and run deadlines.

Every id and timestamp produced during a run comes from one of these
objects, so tests can pin them down exactly.
"""

import itertools
import threading
import time
from datetime import datetime, timezone
from typing import Callable, Optional, Protocol
from uuid import uuid4

from copilotrm.common.exceptions import RunDeadlineExceeded


class IdGenerator(Protocol):
    """Produces a fresh identifier on every call."""
    
    def new_id(self, prefix: str) -> str:
        ...


class Clock(Protocol):
    """Source of the current UTC time."""
    
    def now(self) -> datetime:
        ...


class UuidIdGenerator:
    """Random ids of the form ``<prefix>_<12 hex chars>``."""
    
    def new_id(self, prefix: str) -> str:
        return f"{prefix}_{uuid4().hex[:12]}"


class SequentialIdGenerator:
    """Monotonic ids of the form ``<prefix>_<n>``.
    
    One counter is shared by all prefixes. Safe to use from several
    agent worker threads at once.
    """
    
    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)
        self._lock = threading.Lock()
    
    def new_id(self, prefix: str) -> str:
        with self._lock:
            n = next(self._counter)
        return f"{prefix}_{n}"


class SystemClock:
    """Wall-clock time in UTC."""
    
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock frozen at one instant (tests and replays)."""
    
    def __init__(self, instant: datetime):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        self._instant = instant
    
    def now(self) -> datetime:
        return self._instant


class RunDeadline:
    """Deadline bounding every collaborator call of one run.
    
    A deadline without a timeout never expires.
    """
    
    def __init__(
        self,
        timeout_seconds: Optional[float] = None,
        monotonic: Callable[[], float] = time.monotonic,
    ):
        self._monotonic = monotonic
        self.timeout_seconds = timeout_seconds
        self._expires_at = (
            monotonic() + timeout_seconds if timeout_seconds is not None else None
        )
    
    def remaining(self) -> Optional[float]:
        """Seconds left, ``None`` when unbounded, never negative."""
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - self._monotonic())
    
    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0.0
    
    def check(self, stage: str) -> None:
        """Raise if the deadline has passed before ``stage`` starts."""
        if self.expired:
            raise RunDeadlineExceeded(
                f"Run deadline of {self.timeout_seconds}s exceeded before {stage}",
                stage=stage,
                details={"timeout_seconds": self.timeout_seconds},
            )
