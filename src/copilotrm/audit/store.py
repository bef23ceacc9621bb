"""Audit Store - Keeping run trails beyond the run that produced them.

The orchestrator hands its records to the caller; persisting them is
the caller's choice. Two stores are provided:

- AuditTrail: thread-safe in-memory collection, append-only
- FileAuditStore: daily JSONL files with a sha256 hash chain
"""

import fcntl
import hashlib
import json
import logging
import os
import threading
from pathlib import Path
from typing import Generator, Iterable, List, Optional

from copilotrm.audit.schemas import AuditRecord, StoredAuditRecord
from copilotrm.common.config import Config, get_config
from copilotrm.common.constants import AuditConstants
from copilotrm.common.exceptions import AuditError
from copilotrm.common.runtime import Clock, SystemClock


logger = logging.getLogger(__name__)


class AuditLogIntegrityError(AuditError):
    """Raised when audit log integrity check fails."""
    
    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        super().__init__(message, details={"line_number": line_number})


class AuditTrail:
    """In-memory append-only collection of audit records."""
    
    def __init__(self):
        self._records: List[AuditRecord] = []
        self._lock = threading.Lock()
    
    def write(self, record: AuditRecord) -> None:
        with self._lock:
            self._records.append(record)
    
    def extend(self, records: Iterable[AuditRecord]) -> None:
        with self._lock:
            self._records.extend(records)
    
    def list(self) -> List[AuditRecord]:
        with self._lock:
            return list(self._records)
    
    def by_type(self, record_type: str) -> List[AuditRecord]:
        with self._lock:
            return [r for r in self._records if r.type == record_type]
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class FileAuditStore:
    """File-based audit store with JSONL format and hash chain integrity.
    
    Features:
    - Append-only JSONL files with daily rotation
    - Hash chain for tamper detection
    - Appends serialized with a thread lock and an exclusive file lock
    """
    
    def __init__(
        self,
        log_dir: str | Path,
        log_filename_pattern: str = AuditConstants.LOG_FILENAME_PATTERN,
        hash_algorithm: str = AuditConstants.HASH_ALGORITHM,
        clock: Optional[Clock] = None,
        fsync_on_write: bool = False,
    ):
        """Initialize file audit store.
        
        Args:
            log_dir: Directory for audit logs, created if missing.
            log_filename_pattern: Pattern for log filename. {date} is replaced.
            hash_algorithm: Hash algorithm for integrity checks.
            clock: Time source used for daily rotation.
            fsync_on_write: Whether to fsync after each batch (slower but safer).
        """
        self.log_dir = Path(log_dir)
        self.log_filename_pattern = log_filename_pattern
        self.hash_algorithm = hash_algorithm
        self.fsync_on_write = fsync_on_write
        self._clock = clock or SystemClock()
        self._lock = threading.Lock()
        
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._last_hash: Optional[str] = self._scan_log_for_last_hash(self._today())
    
    @classmethod
    def from_config(cls, config: Optional[Config] = None, **kwargs) -> "FileAuditStore":
        """Build a store writing under the configured audit log directory."""
        config = config or get_config()
        return cls(log_dir=config.audit_log_dir, **kwargs)
    
    def _today(self) -> str:
        return self._clock.now().strftime("%Y-%m-%d")
    
    def _log_path(self, date: str) -> Path:
        return self.log_dir / self.log_filename_pattern.replace("{date}", date)
    
    def _scan_log_for_last_hash(self, date: str) -> Optional[str]:
        """Read the last hash from a day's log file."""
        log_path = self._log_path(date)
        if not log_path.exists():
            return None
        
        last_hash = None
        with open(log_path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line:
                    last_hash = json.loads(line).get("entry_hash")
        return last_hash
    
    def _compute_hash(self, entry_dict: dict) -> str:
        """Hash an entry canonically, with entry_hash blanked."""
        content = json.dumps({**entry_dict, "entry_hash": None}, sort_keys=True, ensure_ascii=False)
        hasher = hashlib.new(self.hash_algorithm)
        hasher.update(content.encode("utf-8"))
        return hasher.hexdigest()
    
    def append_records(
        self,
        records: Iterable[AuditRecord],
        run_id: Optional[str] = None,
    ) -> List[StoredAuditRecord]:
        """Append records in order, chaining each to the previous one.
        
        Args:
            records: Records of one run, in trail order
            run_id: Identifier grouping the records (usually the event id)
            
        Returns:
            The stored records with hash chain fields populated
        """
        with self._lock:
            log_path = self._log_path(self._today())
            if not log_path.exists():
                self._last_hash = None
            
            stored: List[StoredAuditRecord] = []
            lines: List[str] = []
            previous_hash = self._last_hash
            for record in records:
                entry_dict = record.model_dump(mode="json")
                entry_dict["run_id"] = run_id
                entry_dict["previous_hash"] = previous_hash
                entry_dict["entry_hash"] = self._compute_hash(entry_dict)
                previous_hash = entry_dict["entry_hash"]
                stored.append(StoredAuditRecord.model_validate(entry_dict))
                lines.append(json.dumps(entry_dict, sort_keys=True, ensure_ascii=False))
            
            if not lines:
                return stored
            
            fd = os.open(str(log_path), os.O_WRONLY | os.O_CREAT | os.O_APPEND, 0o600)
            try:
                fcntl.flock(fd, fcntl.LOCK_EX)
                try:
                    os.write(fd, ("\n".join(lines) + "\n").encode("utf-8"))
                    if self.fsync_on_write:
                        os.fsync(fd)
                finally:
                    fcntl.flock(fd, fcntl.LOCK_UN)
            except OSError as e:
                raise AuditError(
                    f"Failed to write audit log {log_path}: {e}",
                    details={"path": str(log_path)},
                ) from e
            finally:
                os.close(fd)
            
            self._last_hash = previous_hash
            return stored
    
    def get_records(
        self,
        date: Optional[str] = None,
        record_type: Optional[str] = None,
        run_id: Optional[str] = None,
    ) -> Generator[StoredAuditRecord, None, None]:
        """Retrieve stored records with optional filtering."""
        log_path = self._log_path(date or self._today())
        if not log_path.exists():
            return
        
        with open(log_path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    entry = StoredAuditRecord.from_jsonl(line)
                except ValueError as e:
                    logger.warning(f"Skipped malformed audit entry: {e}")
                    continue
                if record_type and entry.type != record_type:
                    continue
                if run_id and entry.run_id != run_id:
                    continue
                yield entry
    
    def verify_integrity(self, date: Optional[str] = None) -> bool:
        """Verify hash chain integrity of a day's log file."""
        log_path = self._log_path(date or self._today())
        if not log_path.exists():
            return True
        
        previous_hash = None
        with open(log_path, "r", encoding="utf-8") as f:
            for line_number, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    entry_dict = json.loads(line)
                except json.JSONDecodeError as e:
                    raise AuditLogIntegrityError(
                        f"Malformed JSON at line {line_number}: {e}", line_number
                    ) from e
                
                if entry_dict.get("previous_hash") != previous_hash:
                    raise AuditLogIntegrityError(
                        f"Hash chain broken at line {line_number}. "
                        f"Expected previous_hash={previous_hash}, "
                        f"got {entry_dict.get('previous_hash')}",
                        line_number,
                    )
                stored_hash = entry_dict.get("entry_hash")
                if self._compute_hash(entry_dict) != stored_hash:
                    raise AuditLogIntegrityError(
                        f"Entry hash mismatch at line {line_number}. "
                        f"Entry may have been tampered with.",
                        line_number,
                    )
                previous_hash = stored_hash
        
        return True
    
    def get_last_hash(self) -> Optional[str]:
        """Get the hash of the last entry."""
        return self._last_hash
