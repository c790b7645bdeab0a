"""Observability module for audit trails and log configuration."""

from module_index.observability.audit import AuditSink, JSONLAuditSink, StdoutAuditSink
from module_index.observability.log import configure_logging

__all__ = ["AuditSink", "JSONLAuditSink", "StdoutAuditSink", "configure_logging"]
