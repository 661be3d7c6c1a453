from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.api.error import raise_for_error
from src.api.utils.access import require
from src.app.services.authorization import AccessPolicy
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import AuditLogResponse, ListAuditLogsUseCase
from src.depends import get_unit_of_work
from src.domain.principal import Principal

router = APIRouter(prefix="/audit-logs", tags=["Audit"])

VIEW_AUDIT_LOGS = AccessPolicy(require_any_permission=("VIEW_AUDIT_LOGS",))


@router.get("", status_code=status.HTTP_200_OK, response_model=List[AuditLogResponse])
async def list_audit_logs(
    user_id: Optional[UUID] = Query(None, description="Filter by actor"),
    limit: int = Query(50, ge=1, le=200),
    principal: Principal = Depends(require(VIEW_AUDIT_LOGS)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Recent security audit entries, newest first.

    Requires the VIEW_AUDIT_LOGS permission.
    """
    result = await ListAuditLogsUseCase(uow).execute(user_id=user_id, limit=limit)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
