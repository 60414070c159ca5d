"""
tests.test_console

Console repositories and services (dashboard, reference data, intake, branding).
"""

from __future__ import annotations

from datetime import date

import httpx
import pytest
from fake_platform import FakePlatform

from issue_portal.auth.session import SessionState
from issue_portal.errors import UpstreamError, ValidationError
from issue_portal.models import ReportSubmission
from issue_portal.services.console import Console
from issue_portal.services.uploads import UploadedFile
from issue_portal.settings import Settings


@pytest.fixture
def console(settings: Settings, platform_http: httpx.AsyncClient) -> Console:
    return Console.for_session(
        settings=settings, http=platform_http, session=SessionState(access_token="tok")
    )


def _seed_report(platform: FakePlatform, **values: str) -> dict:
    row = {
        "username": "budi",
        "whatsapp": "081234567890",
        "issue_date": "2026-10-01",
        "issue_title": "Tidak bisa login",
        "issue_description": "Muncul error 500",
        "website_id": None,
        "status_id": None,
        "image_url": None,
    }
    row.update(values)
    return platform.add_row("reports", **row)


@pytest.mark.asyncio
async def test_website_crud(console: Console, platform: FakePlatform) -> None:
    created = await console.websites.create("  shop.example  ")
    assert created.name == "shop.example"

    await console.websites.rename(created.id, "store.example")
    assert [w.name for w in await console.websites.list()] == ["store.example"]

    await console.websites.delete(created.id)
    assert await console.websites.list() == []


@pytest.mark.asyncio
async def test_blank_names_are_rejected_before_any_call(
    console: Console, platform: FakePlatform
) -> None:
    with pytest.raises(ValidationError):
        await console.websites.create("   ")
    with pytest.raises(ValidationError):
        await console.statuses.create("")
    assert platform.calls == []


@pytest.mark.asyncio
async def test_status_defaults_and_update(console: Console) -> None:
    status = await console.statuses.create("Baru")
    assert status.color == "#6b7280"

    await console.statuses.update(status.id, name="Selesai", color="#22c55e")
    (only,) = await console.statuses.list()
    assert (only.name, only.color) == ("Selesai", "#22c55e")


@pytest.mark.asyncio
async def test_report_list_embeds_and_orders_newest_first(
    console: Console, platform: FakePlatform
) -> None:
    site = platform.add_row("websites", name="shop.example")
    status = platform.add_row("statuses", name="Baru", color="#f59e0b")
    first = _seed_report(platform, website_id=site["id"], status_id=status["id"])
    second = _seed_report(platform, issue_title="Saldo hilang")

    reports = await console.reports.list()

    assert [r.id for r in reports] == [second["id"], first["id"]]
    assert reports[1].website is not None and reports[1].website.name == "shop.example"
    assert reports[1].status is not None and reports[1].status.color == "#f59e0b"
    assert reports[0].website is None


@pytest.mark.asyncio
async def test_report_filters(console: Console, platform: FakePlatform) -> None:
    status = platform.add_row("statuses", name="Baru", color=None)
    early = _seed_report(platform, issue_date="2026-09-01")
    mid = _seed_report(platform, issue_date="2026-09-15", status_id=status["id"])
    late = _seed_report(platform, issue_date="2026-10-01", username="siti")

    in_range = await console.reports.list(date_from=date(2026, 9, 10), date_to=date(2026, 9, 30))
    assert [r.id for r in in_range] == [mid["id"]]

    by_status = await console.reports.list(status_id=status["id"])
    assert [r.id for r in by_status] == [mid["id"]]

    searched = await console.reports.list(search="SITI")
    assert [r.id for r in searched] == [late["id"]]

    assert len(await console.reports.list(search="   ")) == 3
    assert early["id"] in {r.id for r in await console.reports.list()}


@pytest.mark.asyncio
async def test_report_status_update_and_deletes(console: Console, platform: FakePlatform) -> None:
    a, b, c = (_seed_report(platform) for _ in range(3))

    await console.reports.update_status(a["id"], "statuses-x")
    assert platform.tables["reports"][0]["status_id"] == "statuses-x"

    await console.reports.delete_many([a["id"], b["id"]])
    assert [r["id"] for r in platform.tables["reports"]] == [c["id"]]

    calls_before = len(platform.calls)
    await console.reports.delete_many([])
    assert len(platform.calls) == calls_before

    await console.reports.delete(c["id"])
    assert platform.tables["reports"] == []


def _submission() -> ReportSubmission:
    return ReportSubmission(
        username=" budi ",
        whatsapp="081234567890",
        issue_date=date(2026, 10, 19),
        issue_title="Tidak bisa login",
        website_id="websites-1",
        issue_description="Muncul error 500",
        status_id="statuses-1",
    )


@pytest.mark.asyncio
async def test_intake_without_image(console: Console, platform: FakePlatform) -> None:
    submitted = await console.intake.submit(_submission())

    assert submitted["username"] == "budi"
    assert submitted["image_url"] is None
    assert platform.tables["reports"][0]["username"] == "budi"
    assert platform.tables["reports"][0]["issue_date"] == "2026-10-19"
    assert platform.objects == {}


@pytest.mark.asyncio
async def test_intake_with_image_uploads_then_inserts(
    console: Console, platform: FakePlatform, settings: Settings
) -> None:
    image = UploadedFile(filename="layar.png", content=b"\x89PNG", content_type="image/png")

    submitted = await console.intake.submit(_submission(), image=image)

    ((key, content),) = platform.objects.items()
    assert key.startswith("reports/") and key.endswith(".png")
    assert content == b"\x89PNG"
    assert submitted["image_url"] == f"{settings.platform_url}/storage/v1/object/public/{key}"
    assert platform.tables["reports"][0]["image_url"] == submitted["image_url"]


@pytest.mark.asyncio
async def test_intake_rejects_oversized_image(console: Console, platform: FakePlatform) -> None:
    image = UploadedFile(filename="big.jpg", content=b"x" * (5 * 1024 * 1024 + 1))

    with pytest.raises(ValidationError, match="maksimal 5MB"):
        await console.intake.submit(_submission(), image=image)
    assert platform.calls == []


@pytest.mark.asyncio
async def test_intake_insert_failure_surfaces_platform_message(
    console: Console, platform: FakePlatform
) -> None:
    platform.fail[("POST", "/rest/v1/reports")] = (
        400,
        {"message": "insert or update on table violates foreign key constraint"},
    )

    with pytest.raises(UpstreamError, match="foreign key"):
        await console.intake.submit(_submission())


@pytest.mark.asyncio
async def test_branding_save_and_upload(
    console: Console, platform: FakePlatform, settings: Settings
) -> None:
    platform.add_row("site_settings", site_title="Lapor", logo_url=None)

    saved = await console.branding.save(
        site_title="Pusat Bantuan", button_color="#000000", border_color="#ffffff"
    )
    assert saved.site_title == "Pusat Bantuan"

    logo = UploadedFile(filename="logo.svg", content=b"<svg/>", content_type="image/svg+xml")
    updated = await console.branding.upload_asset("logo_url", logo)

    ((key, _),) = platform.objects.items()
    assert key.startswith("site-assets/logo_url-") and key.endswith(".svg")
    assert updated.logo_url == f"{settings.platform_url}/storage/v1/object/public/{key}"
    current = await console.site_settings.get()
    assert current is not None and current.logo_url == updated.logo_url


@pytest.mark.asyncio
async def test_branding_requires_settings_row(console: Console) -> None:
    with pytest.raises(ValidationError):
        await console.branding.save(site_title="x", button_color="#000", border_color="#fff")


@pytest.mark.asyncio
async def test_branding_rejects_unknown_field(console: Console, platform: FakePlatform) -> None:
    platform.add_row("site_settings", site_title="Lapor")
    upload = UploadedFile(filename="a.png", content=b"1")

    with pytest.raises(ValidationError):
        await console.branding.upload_asset("header_url", upload)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_signed_out_console_uses_anon_key(
    settings: Settings, platform: FakePlatform, platform_http: httpx.AsyncClient
) -> None:
    seen: list[str] = []
    original = platform.handle

    def spy(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers["authorization"])
        return original(request)

    platform.transport.handler = spy  # type: ignore[attr-defined]
    console = Console.for_session(settings=settings, http=platform_http, session=SessionState())

    await console.websites.list()
    assert seen == [f"Bearer {settings.platform_anon_key}"]


@pytest.mark.asyncio
async def test_signed_out_intake_inserts_without_reading_back(
    settings: Settings, platform: FakePlatform, platform_http: httpx.AsyncClient
) -> None:
    console = Console.for_session(settings=settings, http=platform_http, session=SessionState())
    image = UploadedFile(filename="layar.jpg", content=b"\xff\xd8", content_type="image/jpeg")

    submitted = await console.intake.submit(_submission(), image=image)

    (stored,) = platform.tables["reports"]
    assert stored["issue_title"] == submitted["issue_title"] == "Tidak bisa login"
    assert stored["image_url"] == submitted["image_url"]
    # Filing is open to everyone; reading the reports back is not.
    with pytest.raises(UpstreamError, match="permission denied"):
        await console.reports.list()


@pytest.mark.asyncio
async def test_settings_update_matching_no_row_is_rejected(console: Console) -> None:
    with pytest.raises(ValidationError, match="Pengaturan situs tidak ditemukan"):
        await console.site_settings.update("site_settings-404", site_title="x")


@pytest.mark.asyncio
async def test_create_with_hidden_representation_is_rejected(
    console: Console, platform: FakePlatform
) -> None:
    platform.fail[("POST", "/rest/v1/websites")] = (201, [])
    platform.fail[("POST", "/rest/v1/statuses")] = (201, [])

    with pytest.raises(ValidationError, match="Website gagal disimpan"):
        await console.websites.create("shop.example")
    with pytest.raises(ValidationError, match="Status gagal disimpan"):
        await console.statuses.create("Baru")
