# tests/test_resolver.py
from __future__ import annotations

import httpx
import pytest

from renderapi.adapters.resolver import filter_by_name, name_matches, pick_match, resolve_resource
from renderapi.adapters.resources import determine_env_group, determine_registry_credential, determine_service
from renderapi.core.config import AppSettings
from renderapi.core.domain.ids import ResourceKind
from renderapi.core.domain.models import Service
from renderapi.core.errors import AmbiguousMatchError, NotFoundError, RequestError
from tests.conftest import TEST_TOKEN, FakeRender


def _services(*names: str) -> list[dict[str, str]]:
    return [{"id": f"srv-{i}", "name": name} for i, name in enumerate(names)]


def test_name_matches_is_a_regex_search() -> None:
    assert name_matches("prod", "foo-prod-staging")
    assert name_matches("^foo-", "foo-prod")
    assert not name_matches("^prod", "foo-prod")


def test_invalid_regex_is_matched_literally() -> None:
    assert name_matches("api(v2", "legacy-api(v2")
    assert not name_matches("api(v2", "api-v2")


def test_empty_filter_keeps_everything() -> None:
    services = [Service(id="srv-1", name="a"), Service(id="srv-2", name="b")]
    assert filter_by_name(services, "") == services


def test_pick_match_prefers_exact_name() -> None:
    matches = [Service(id="srv-2", name="foo-prod-staging"), Service(id="srv-1", name="foo-prod")]
    assert pick_match("foo-prod", matches, kind=ResourceKind.SERVICE).id == "srv-1"


@pytest.mark.asyncio
async def test_exact_match_wins_the_tie_break(
    fake: FakeRender, client: httpx.AsyncClient, settings: AppSettings
) -> None:
    fake.paged("services", "service", _services("foo-prod-staging", "foo-prod", "foo-prod-canary"))

    service = await determine_service(TEST_TOKEN, "foo-prod", settings=settings, client=client)

    assert service.name == "foo-prod"
    assert service.id == "srv-1"


@pytest.mark.asyncio
async def test_single_pattern_match_is_returned(
    fake: FakeRender, client: httpx.AsyncClient, settings: AppSettings
) -> None:
    fake.paged("services", "service", _services("billing-api", "web-frontend"))

    service = await determine_service(TEST_TOKEN, "front", settings=settings, client=client)

    assert service.name == "web-frontend"


@pytest.mark.asyncio
async def test_ambiguous_match_lists_every_candidate(
    fake: FakeRender, client: httpx.AsyncClient, settings: AppSettings
) -> None:
    fake.paged("services", "service", _services("foo-a", "foo-b", "bar"))

    with pytest.raises(AmbiguousMatchError) as excinfo:
        await determine_service(TEST_TOKEN, "foo", settings=settings, client=client)

    assert excinfo.value.candidates == [("foo-a", "srv-0"), ("foo-b", "srv-1")]
    assert "foo-a (srv-0)" in str(excinfo.value)
    assert "foo-b (srv-1)" in str(excinfo.value)


@pytest.mark.asyncio
async def test_no_match_raises_not_found(
    fake: FakeRender, client: httpx.AsyncClient, settings: AppSettings
) -> None:
    fake.paged("services", "service", _services("foo-a"))

    with pytest.raises(NotFoundError) as excinfo:
        await determine_service(TEST_TOKEN, "nonexistent", settings=settings, client=client)

    assert excinfo.value.query == "nonexistent"
    assert "nonexistent" in str(excinfo.value)


@pytest.mark.asyncio
async def test_id_is_fetched_directly_without_listing(
    fake: FakeRender, client: httpx.AsyncClient, settings: AppSettings
) -> None:
    fake.json("services/srv-abc", {"id": "srv-abc", "name": "api", "type": "web_service"})

    service = await determine_service(TEST_TOKEN, "srv-abc", settings=settings, client=client)

    assert service.id == "srv-abc"
    assert fake.paths() == ["/v1/services/srv-abc"]


@pytest.mark.asyncio
async def test_unknown_id_surfaces_request_error(
    fake: FakeRender, client: httpx.AsyncClient, settings: AppSettings
) -> None:
    with pytest.raises(RequestError) as excinfo:
        await determine_service(TEST_TOKEN, "srv-missing", settings=settings, client=client)

    assert excinfo.value.status_code == 404
    assert not isinstance(excinfo.value, NotFoundError)


@pytest.mark.asyncio
async def test_name_resembling_other_kind_prefix_is_searched_by_name(
    fake: FakeRender, client: httpx.AsyncClient, settings: AppSettings
) -> None:
    fake.paged("env-groups", "envGroup", [{"id": "evg-1", "name": "srv-shared"}])

    group = await determine_env_group(TEST_TOKEN, "srv-shared", settings=settings, client=client)

    assert group.id == "evg-1"


@pytest.mark.asyncio
async def test_registry_credential_resolved_from_unpaged_listing(
    fake: FakeRender, client: httpx.AsyncClient, settings: AppSettings
) -> None:
    fake.json(
        "registrycredentials",
        [{"id": "rgc-1", "name": "dockerhub"}, {"id": "rgc-2", "name": "dockerhub-ci"}],
    )

    credential = await determine_registry_credential(TEST_TOKEN, "dockerhub", settings=settings, client=client)

    assert credential.id == "rgc-1"
    assert len(fake.requests) == 1


@pytest.mark.asyncio
async def test_resolve_resource_with_plain_callables() -> None:
    calls: list[str] = []

    async def fetch(ident: str) -> Service:
        calls.append(f"fetch:{ident}")
        return Service(id=ident, name="by-id")

    async def search(pattern: str) -> list[Service]:
        calls.append(f"search:{pattern}")
        return [Service(id="srv-9", name="worker")]

    by_id = await resolve_resource("srv-1", kind=ResourceKind.SERVICE, fetch_by_id=fetch, list_by_name=search)
    by_name = await resolve_resource("work", kind=ResourceKind.SERVICE, fetch_by_id=fetch, list_by_name=search)

    assert by_id.name == "by-id"
    assert by_name.id == "srv-9"
    assert calls == ["fetch:srv-1", "search:work"]
