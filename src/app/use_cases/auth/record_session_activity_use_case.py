from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Result, Return
from .dtos import SessionActivityResponse


class RecordSessionActivityUseCase:
    """Update last-seen metadata of a live session without affecting validity"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        refresh_token: str,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Result[SessionActivityResponse]:
        async with self.uow:
            updated = await self.uow.sessions.touch_activity(
                refresh_token, user_agent=user_agent, ip_address=ip_address
            )
            await self.uow.commit()
            return Return.ok(SessionActivityResponse(updated=updated))
