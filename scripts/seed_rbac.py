"""Seed the permission catalog and built-in roles, optionally with an admin.

Usage (from the project root):
    python -m scripts.seed_rbac
    python -m scripts.seed_rbac --admin-email admin@example.com --admin-password 'S3cure!pass'

Environment Variables:
    ADMIN_EMAIL: Email for the bootstrap admin user
    ADMIN_PASSWORD: Password for the bootstrap admin user
"""

import argparse
import asyncio
import logging
import os
import sys

from sqlmodel import SQLModel

from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.roles import BootstrapAdminUseCase, SeedCatalogUseCase
from src.depends import AsyncSessionLocal, engine, password_hasher


async def seed(admin_email=None, admin_password=None) -> int:
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSessionLocal() as session:
        result = await SeedCatalogUseCase(SqlAlchemyUnitOfWork(session)).execute()
    summary = result.value
    print(
        f"Permissions created: {summary.permissions_created}, "
        f"roles created: {summary.roles_created}, "
        f"grants created: {summary.grants_created}"
    )

    exit_code = 0
    if admin_email:
        async with AsyncSessionLocal() as session:
            result = await BootstrapAdminUseCase(
                SqlAlchemyUnitOfWork(session), password_hasher
            ).execute(admin_email, admin_password)
        if result.is_err():
            print(f"Error: {result.error.message}")
            exit_code = 1
        else:
            print(result.value.message)

    await engine.dispose()
    return exit_code


def main():
    parser = argparse.ArgumentParser(
        description="Seed roles and permissions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--admin-email",
        default=os.environ.get("ADMIN_EMAIL"),
        help="Bootstrap admin email (or set ADMIN_EMAIL env var)",
    )
    parser.add_argument(
        "--admin-password",
        default=os.environ.get("ADMIN_PASSWORD"),
        help="Bootstrap admin password (or set ADMIN_PASSWORD env var)",
    )
    args = parser.parse_args()

    if args.admin_email and not args.admin_password:
        print("Error: --admin-password or ADMIN_PASSWORD required with --admin-email")
        sys.exit(1)

    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL)
    sys.exit(asyncio.run(seed(args.admin_email, args.admin_password)))


if __name__ == "__main__":
    main()
