"""Audit logging interfaces and implementations for module-index.

This module provides the AuditSink abstract interface for recording analysis
operations, along with concrete implementations for different backends.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path

from module_index.models import AuditEvent


class AuditSink(ABC):
    """Abstract interface for audit logging.

    AuditSink defines the contract for recording what the analyzer did:
    which module files were analyzed, how many executables each produced,
    and which analyses failed.
    """

    @abstractmethod
    def log(self, event: AuditEvent) -> None:
        """Record an audit event.

        Args:
            event: The AuditEvent to record, containing timestamp, operation kind,
                   module name, and operation-specific details.
        """
        pass


class JSONLAuditSink(AuditSink):
    """Writes audit events to a JSONL (JSON Lines) file.

    Each audit event is serialized as a single JSON line and appended to the log file.

    Example log file content:
        {"ts":"2024-01-01T12:00:00","kind":"analyze","module":"gcc/9.2.0","count":12,...}
        {"ts":"2024-01-01T12:00:01","kind":"error","module":"broken/1.0",...}
    """

    def __init__(self, log_path: Path):
        """Initialize JSONLAuditSink with log file path.

        Args:
            log_path: Path to the JSONL log file. Parent directories will be created
                     if they don't exist.
        """
        self.log_path = Path(log_path)
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def log(self, event: AuditEvent) -> None:
        json_line = json.dumps(event.to_dict(), separators=(',', ':'))

        with open(self.log_path, 'a', encoding='utf-8') as f:
            f.write(json_line + '\n')


class StdoutAuditSink(AuditSink):
    """Writes audit events to stdout as JSON lines."""

    def log(self, event: AuditEvent) -> None:
        print(json.dumps(event.to_dict(), separators=(',', ':')))
