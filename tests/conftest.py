from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from fake_platform import ANON_KEY, SERVICE_KEY, FakePlatform

from issue_portal.api.app import create_app
from issue_portal.settings import Settings


@pytest.fixture
def platform() -> FakePlatform:
    return FakePlatform()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        env="test",
        log_level="WARNING",
        platform_url="http://platform.test",
        platform_anon_key=ANON_KEY,
        platform_service_role_key=SERVICE_KEY,
    )


@pytest_asyncio.fixture
async def client(settings: Settings, platform: FakePlatform) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(settings=settings, transport=platform.transport)
    # httpx ASGITransport does not run the lifespan; enter it explicitly.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            yield c


@pytest_asyncio.fixture
async def platform_http(
    settings: Settings, platform: FakePlatform
) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(
        base_url=settings.platform_url, transport=platform.transport
    ) as http:
        yield http
