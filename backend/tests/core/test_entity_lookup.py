"""Entity Lookup — tests for the tagged lookup result.

Tests cover:
    - hit with a record is found; hit with None collapses to a miss
    - resolve_first returns the first found result in order
"""

from app.core.domain_types import EntityKind
from app.core.entity_lookup import LookupResult, resolve_first


def test_hit_is_found():
    result = LookupResult.hit(EntityKind.TASK, object())
    assert result.found
    assert result.kind is EntityKind.TASK


def test_hit_with_none_is_miss():
    result = LookupResult.hit(EntityKind.FOLDER, None)
    assert not result.found
    assert result.kind is None


def test_resolve_first_picks_first_found():
    folder = object()
    result = resolve_first([
        LookupResult.miss(),
        LookupResult.hit(EntityKind.FOLDER, folder),
        LookupResult.hit(EntityKind.TASK, object()),
    ])
    assert result.kind is EntityKind.FOLDER
    assert result.record is folder


def test_resolve_first_all_misses():
    assert not resolve_first([LookupResult.miss(), LookupResult.miss()]).found
    assert not resolve_first([]).found
