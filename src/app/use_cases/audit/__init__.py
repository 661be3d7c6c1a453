"""
Audit Use Cases
"""

from .list_audit_logs_use_case import AuditLogResponse, ListAuditLogsUseCase

__all__ = [
    "ListAuditLogsUseCase",
    "AuditLogResponse",
]
