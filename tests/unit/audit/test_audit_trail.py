"""Tests for the per-run trail builder and the in-memory trail."""

import threading

import pytest
from pydantic import ValidationError as PydanticValidationError

from copilotrm.audit import AuditRecord, AuditTrail, AuditTrailBuilder


class TestAuditTrailBuilder:
    """Tests for AuditTrailBuilder."""
    
    def test_record_stamps_id_and_time(self, ids, clock):
        builder = AuditTrailBuilder(ids=ids, clock=clock)
        record = builder.record("orchestrator", "event.received", {"eventId": "e1"})
        
        assert record.id == "audit_1"
        assert record.timestamp == clock.now()
        assert record.actor == "orchestrator"
        assert record.type == "event.received"
        assert record.payload == {"eventId": "e1"}
    
    def test_keeps_call_order(self, ids, clock):
        builder = AuditTrailBuilder(ids=ids, clock=clock)
        for record_type in ["a", "b", "a", "c"]:
            builder.record("x", record_type)
        
        assert [r.type for r in builder.records] == ["a", "b", "a", "c"]
        assert len(builder) == 4
    
    def test_no_deduplication(self):
        builder = AuditTrailBuilder()
        builder.record("x", "same", {"n": 1})
        builder.record("x", "same", {"n": 1})
        
        assert len(builder.records) == 2
        assert builder.records[0].id != builder.records[1].id
    
    def test_payload_is_copied(self):
        payload = {"count": 1}
        record = AuditTrailBuilder().record("x", "y", payload)
        payload["count"] = 2
        
        assert record.payload == {"count": 1}
    
    def test_records_are_immutable(self):
        record = AuditTrailBuilder().record("x", "y")
        
        with pytest.raises(PydanticValidationError):
            record.type = "z"
    
    def test_snapshot_does_not_grow(self):
        builder = AuditTrailBuilder()
        builder.record("x", "y")
        snapshot = builder.records
        builder.record("x", "z")
        
        assert len(snapshot) == 1


class TestAuditTrail:
    """Tests for the thread-safe in-memory trail."""
    
    def _record(self, n, record_type="t"):
        return AuditTrailBuilder().record("x", record_type, {"n": n})
    
    def test_write_and_filter(self):
        trail = AuditTrail()
        trail.write(self._record(1, "a"))
        trail.extend([self._record(2, "b"), self._record(3, "a")])
        
        assert [r.payload["n"] for r in trail.list()] == [1, 2, 3]
        assert [r.payload["n"] for r in trail.by_type("a")] == [1, 3]
        assert len(trail) == 3
    
    def test_concurrent_writes(self):
        trail = AuditTrail()
        records = [self._record(n) for n in range(200)]
        
        threads = [
            threading.Thread(target=lambda chunk=records[i::4]: [trail.write(r) for r in chunk])
            for i in range(4)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        
        assert sorted(r.payload["n"] for r in trail.list()) == list(range(200))
    
    def test_jsonl_roundtrip(self):
        record = self._record(7)
        
        assert AuditRecord.model_validate_json(record.to_jsonl()) == record
