"""
issue_portal.cli

Command line entrypoint (`issue-portal`).

Responsibilities:
- `serve`: run the API with uvicorn.
- `bootstrap-admin`: create the first admin account with the service credential,
  for when no admin exists yet to call the admin-management endpoint.
"""

from __future__ import annotations

import argparse
import asyncio
import sys

import httpx
import uvicorn

from issue_portal.api.app import create_app
from issue_portal.errors import PortalError
from issue_portal.observability.logging import configure_logging
from issue_portal.platform_clients.auth_http import PlatformAdminClient
from issue_portal.platform_clients.base import PlatformCredential
from issue_portal.platform_clients.rest_http import PlatformRestClient
from issue_portal.repositories.user_roles import UserRoleRepo
from issue_portal.services.admin_management import AdminManagementService
from issue_portal.settings import Settings, get_settings


async def bootstrap_admin(
    settings: Settings,
    *,
    email: str,
    password: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    async with httpx.AsyncClient(
        base_url=settings.platform_url,
        timeout=settings.platform_timeout_seconds,
        transport=transport,
    ) as http:
        svc = AdminManagementService(
            settings=settings,
            admin=PlatformAdminClient(settings=settings, http=http),
            roles=UserRoleRepo(
                PlatformRestClient(http=http, credential=PlatformCredential.service(settings))
            ),
        )
        return await svc.create_admin(email=email, password=password, actor="cli")


def serve(settings: Settings) -> None:
    app = create_app(settings=settings)
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="issue-portal")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("serve", help="run the admin-management API")

    boot = sub.add_parser("bootstrap-admin", help="create an admin account directly")
    boot.add_argument("--email", required=True)
    boot.add_argument("--password", required=True)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_settings()

    if args.command == "serve":
        serve(settings)
        return 0

    configure_logging(service_name=settings.service_name, level=settings.log_level)
    try:
        user_id = asyncio.run(
            bootstrap_admin(settings, email=args.email, password=args.password)
        )
    except PortalError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1
    print(user_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())


# --- Module Notes -----------------------------------------------------------
# `bootstrap-admin` exists because the HTTP endpoint requires an admin to already exist.
