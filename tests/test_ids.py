# tests/test_ids.py
from __future__ import annotations

import pytest

from renderapi.core.domain import ids
from renderapi.core.domain.ids import ID_PREFIXES, ResourceKind, classify_id

PREDICATES = {
    ResourceKind.SERVICE: ids.is_service_id,
    ResourceKind.ENVIRONMENT: ids.is_environment_id,
    ResourceKind.CRON_JOB: ids.is_cron_id,
    ResourceKind.JOB: ids.is_job_id,
    ResourceKind.REDIS: ids.is_redis_id,
    ResourceKind.POSTGRES: ids.is_postgres_id,
    ResourceKind.ENV_GROUP: ids.is_env_group_id,
    ResourceKind.REGISTRY_CREDENTIAL: ids.is_registry_credential_id,
}

SUFFIXES = ["abc123", "", "srv-nested", "d1a2b3c4e5", "UPPER-case"]


def test_every_kind_has_a_prefix_and_predicate() -> None:
    assert set(ID_PREFIXES) == set(ResourceKind)
    assert set(PREDICATES) == set(ResourceKind)


def test_prefixes_are_structurally_exclusive() -> None:
    prefixes = list(ID_PREFIXES.values())
    assert len(set(prefixes)) == len(prefixes)
    for a in prefixes:
        assert a.endswith("-")
        for b in prefixes:
            if a != b:
                assert not a.startswith(b)


@pytest.mark.parametrize("kind", list(ResourceKind))
@pytest.mark.parametrize("suffix", SUFFIXES)
def test_prefixed_string_classifies_as_exactly_one_kind(kind: ResourceKind, suffix: str) -> None:
    value = kind.prefix + suffix
    assert classify_id(value) is kind
    matching = [k for k, predicate in PREDICATES.items() if predicate(value)]
    assert matching == [kind]


@pytest.mark.parametrize("value", ["", "my-service", "srv", "SRV-abc", " srv-abc", "redis-prod"])
def test_unprefixed_strings_classify_as_none(value: str) -> None:
    assert classify_id(value) is None
    assert not any(predicate(value) for predicate in PREDICATES.values())


def test_redis_and_postgres_are_distinct_from_jobs() -> None:
    assert ids.is_redis_id("red-abc") and not ids.is_job_id("red-abc")
    assert ids.is_postgres_id("dpg-abc") and not ids.is_job_id("dpg-abc")
    assert not ids.is_redis_id("job-abc")
    assert not ids.is_postgres_id("job-abc")
