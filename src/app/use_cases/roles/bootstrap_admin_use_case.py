from src.app.services.password_hasher import PasswordHasher
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import RoleAssignment, User, UserProfile, UserRole
from src.domain.result import Error, Result, Return
from .dtos import MessageResponse

ADMIN_ROLE = "ADMIN"


class BootstrapAdminUseCase:
    """
    Create (or promote) the first administrator.

    An existing account keeps its password and simply receives the ADMIN
    role if it does not hold it yet.
    """

    def __init__(self, uow: UnitOfWork, password_hasher: PasswordHasher):
        self.uow = uow
        self.password_hasher = password_hasher

    async def execute(
        self, email: str, password: str, first_name: str = "Admin", last_name: str = "User"
    ) -> Result[MessageResponse]:
        async with self.uow:
            role = await self.uow.roles.get_by_name(ADMIN_ROLE)
            if role is None or not role.is_active:
                return Return.err(
                    Error("ROLE_NOT_FOUND", "ADMIN role missing, seed the catalog first")
                )

            user = await self.uow.users.get_by_email(email)
            created = user is None
            if created:
                user = await self.uow.users.create(
                    User(
                        email=email,
                        password_hash=self.password_hasher.hash(password),
                        first_name=first_name,
                        last_name=last_name,
                        is_verified=True,
                    )
                )
                await self.uow.users.create_profile(UserProfile(user_id=user.id))

            user_role = await self.uow.user_roles.get(user.id, role.id)
            if user_role is not None and user_role.is_active:
                return Return.ok(MessageResponse(message=f"{email} is already an admin"))

            if user_role is None:
                user_role = UserRole(user_id=user.id, role_id=role.id)
            else:
                user_role.is_active = True
                user_role.assigned_at = utcnow()
            await self.uow.user_roles.save(user_role)
            await self.uow.user_roles.create_assignment(
                RoleAssignment(user_id=user.id, role_id=role.id, reason="Bootstrap admin")
            )
            await self.uow.commit()

            action = "created" if created else "promoted"
            return Return.ok(MessageResponse(message=f"Admin {email} {action}"))
