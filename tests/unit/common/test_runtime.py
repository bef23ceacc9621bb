"""Tests for injected runtime services."""

import re
import threading
from datetime import datetime, timezone

import pytest

from copilotrm.common.exceptions import RunDeadlineExceeded
from copilotrm.common.runtime import (
    FixedClock,
    RunDeadline,
    SequentialIdGenerator,
    SystemClock,
    UuidIdGenerator,
)


class FakeMonotonic:
    """Manually advanced monotonic clock."""
    
    def __init__(self):
        self.now = 100.0
    
    def __call__(self):
        return self.now


class TestIdGenerators:
    """Tests for id generators."""
    
    def test_uuid_ids(self):
        ids = UuidIdGenerator()
        first, second = ids.new_id("task"), ids.new_id("task")
        
        assert re.fullmatch(r"task_[0-9a-f]{12}", first)
        assert first != second
    
    def test_sequential_ids_share_one_counter(self):
        ids = SequentialIdGenerator()
        
        assert [ids.new_id("task"), ids.new_id("draft"), ids.new_id("task")] == [
            "task_1", "draft_2", "task_3",
        ]
    
    def test_sequential_ids_thread_safe(self):
        ids = SequentialIdGenerator()
        seen = []
        lock = threading.Lock()
        
        def worker():
            for _ in range(100):
                value = ids.new_id("x")
                with lock:
                    seen.append(value)
        
        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        
        assert len(set(seen)) == 400


class TestClocks:
    """Tests for clocks."""
    
    def test_system_clock_is_utc(self):
        assert SystemClock().now().tzinfo == timezone.utc
    
    def test_fixed_clock_assumes_utc(self):
        clock = FixedClock(datetime(2026, 1, 1, 12, 0))
        
        assert clock.now() == datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class TestRunDeadline:
    """Tests for RunDeadline."""
    
    def test_unbounded(self):
        deadline = RunDeadline()
        
        assert deadline.remaining() is None
        assert deadline.expired is False
        deadline.check("rules")
    
    def test_counts_down(self):
        monotonic = FakeMonotonic()
        deadline = RunDeadline(5.0, monotonic=monotonic)
        monotonic.now += 2.0
        
        assert deadline.remaining() == pytest.approx(3.0)
        assert deadline.expired is False
    
    def test_expires(self):
        monotonic = FakeMonotonic()
        deadline = RunDeadline(1.0, monotonic=monotonic)
        monotonic.now += 1.5
        
        assert deadline.remaining() == 0.0
        assert deadline.expired is True
        with pytest.raises(RunDeadlineExceeded) as exc_info:
            deadline.check("handoffs")
        assert exc_info.value.details["stage"] == "handoffs"
        assert exc_info.value.code == "DEADLINE_EXCEEDED"
