import logging

from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class CleanupSessionsUseCase:
    """Delete expired and revoked sessions. Runs off the request path."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> int:
        async with self.uow:
            deleted = await self.uow.sessions.delete_dead()
            await self.uow.commit()

        if deleted:
            logger.info(f"Session cleanup removed {deleted} dead sessions")
        return deleted
