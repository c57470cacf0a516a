"""Tests for ResourceRepository."""

from datetime import datetime
from unittest.mock import AsyncMock

import pytest
from structlog.testing import capture_logs

from resource_service.db.turso import TursoClient
from resource_service.models.resource import ResourceCreate, ResourceUpdate
from resource_service.repositories.resource_repo import ResourceRepository
from resource_service.resources.normalizer import InvalidResourceInput


@pytest.mark.asyncio
async def test_create_assigns_id_and_equal_timestamps(repo: ResourceRepository):
    """Create should assign a string id and set both timestamps to now."""
    created = await repo.create({"name": "  Widget  ", "details": "blue"})

    assert created.id == "1"
    assert created.name == "Widget"
    assert created.details == "blue"
    assert created.created_at == "2024-01-01T12:00:00.000Z"
    assert created.updated_at == created.created_at


@pytest.mark.asyncio
async def test_create_defaults_details_to_empty(repo: ResourceRepository):
    """Details should default to empty string when omitted."""
    created = await repo.create(ResourceCreate(name="Gadget"))

    assert created.details == ""


@pytest.mark.asyncio
async def test_create_rejects_blank_name(repo: ResourceRepository, db_client: TursoClient):
    """Blank names are rejected before anything is written."""
    with pytest.raises(InvalidResourceInput):
        await repo.create({"name": "   "})

    result = await db_client.execute("SELECT COUNT(*) FROM resources")
    assert result.rows[0][0] == 0


@pytest.mark.asyncio
async def test_create_allows_duplicate_names(repo: ResourceRepository):
    """Multiple resources may share a name."""
    first = await repo.create({"name": "Same"})
    second = await repo.create({"name": "Same"})

    assert first.id != second.id


@pytest.mark.asyncio
async def test_get_round_trip(repo: ResourceRepository):
    """Get should return exactly what create returned."""
    created = await repo.create({"name": "Widget", "details": "blue"})

    fetched = await repo.get(created.id)

    assert fetched == created


@pytest.mark.asyncio
async def test_get_nonexistent_returns_none(repo: ResourceRepository):
    """Unknown ids report absence."""
    assert await repo.get("999") is None


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_id", ["abc", "", "-1", "1.5", "0", "99999999999999999999999"])
async def test_get_malformed_id_returns_none(repo: ResourceRepository, bad_id: str):
    """Malformed ids are indistinguishable from missing records."""
    await repo.create({"name": "Widget"})

    assert await repo.get(bad_id) is None


@pytest.mark.asyncio
async def test_list_example_scenario(repo: ResourceRepository):
    """Search matches name or details, ordered by ascending key."""
    await repo.create({"name": "Widget", "details": "blue"})
    await repo.create({"name": "Gadget", "details": "blue widget"})
    await repo.create({"name": "Sprocket", "details": "red"})

    page = await repo.list(q="widget")

    assert page.total == 2
    assert [item.id for item in page.items] == ["1", "2"]


@pytest.mark.asyncio
async def test_list_search_is_case_insensitive(repo: ResourceRepository):
    """Search ignores case in both directions."""
    await repo.create({"name": "Alpha"})
    await repo.create({"name": "Beta"})

    lower = await repo.list(q="alpha")
    upper = await repo.list(q="ALP")

    assert [item.name for item in lower.items] == ["Alpha"]
    assert [item.name for item in upper.items] == ["Alpha"]


@pytest.mark.asyncio
async def test_list_blank_query_matches_all(repo: ResourceRepository):
    """Blank q applies no filter."""
    await repo.create({"name": "Alpha"})
    await repo.create({"name": "Beta"})

    page = await repo.list(q="   ")

    assert page.total == 2


@pytest.mark.asyncio
async def test_list_treats_like_wildcards_literally(repo: ResourceRepository):
    """Percent and underscore in q are plain characters."""
    await repo.create({"name": "100% cotton"})
    await repo.create({"name": "cotton"})

    page = await repo.list(q="0%")

    assert [item.name for item in page.items] == ["100% cotton"]


@pytest.mark.asyncio
async def test_list_total_ignores_window(repo: ResourceRepository):
    """Total counts all matches regardless of limit and offset."""
    for i in range(5):
        await repo.create({"name": f"item {i}"})

    page = await repo.list(limit=2, offset=1)
    beyond = await repo.list(offset=50)

    assert page.total == 5
    assert [item.id for item in page.items] == ["2", "3"]
    assert beyond.total == 5
    assert beyond.items == []


@pytest.mark.asyncio
async def test_list_clamps_window(repo: ResourceRepository):
    """Out-of-range limit and offset are clamped."""
    for i in range(3):
        await repo.create({"name": f"item {i}"})

    zero = await repo.list(limit=0)
    huge = await repo.list(limit=1000)
    negative = await repo.list(offset=-5)

    assert zero.limit == 1
    assert len(zero.items) == 1
    assert huge.limit == 100
    assert len(huge.items) == 3
    assert negative.offset == 0
    assert negative.items[0].id == "1"


@pytest.mark.asyncio
async def test_list_malformed_window_uses_defaults(repo: ResourceRepository):
    """Non-numeric limit/offset degrade to defaults."""
    await repo.create({"name": "only"})

    page = await repo.list(q=None, limit="lots", offset=object())

    assert page.limit == 20
    assert page.offset == 0
    assert page.total == 1


@pytest.mark.asyncio
async def test_update_preserves_untouched_fields(repo: ResourceRepository):
    """Partial update changes only supplied fields and advances updatedAt."""
    created = await repo.create({"name": "A", "details": "B"})

    updated = await repo.update(created.id, {"details": "C"})

    assert updated is not None
    assert updated.name == "A"
    assert updated.details == "C"
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at
    assert await repo.get(created.id) == updated


@pytest.mark.asyncio
async def test_update_ignores_blank_name(repo: ResourceRepository):
    """A name that trims to empty leaves the stored name alone."""
    created = await repo.create({"name": "Keep", "details": "x"})

    updated = await repo.update(created.id, {"name": "   "})

    assert updated is not None
    assert updated.name == "Keep"
    assert updated.details == "x"


@pytest.mark.asyncio
async def test_update_trims_name_and_allows_empty_details(repo: ResourceRepository):
    """Names are trimmed; details may be cleared."""
    created = await repo.create({"name": "Old", "details": "something"})

    updated = await repo.update(created.id, ResourceUpdate(name="  New ", details=""))

    assert updated is not None
    assert updated.name == "New"
    assert updated.details == ""


@pytest.mark.asyncio
async def test_empty_update_still_touches(repo: ResourceRepository):
    """An update with no usable fields refreshes updatedAt only."""
    created = await repo.create({"name": "Same", "details": "same"})

    updated = await repo.update(created.id, {})

    assert updated is not None
    assert (updated.name, updated.details) == ("Same", "same")
    assert updated.updated_at > created.updated_at


@pytest.mark.asyncio
async def test_update_nonexistent_returns_none(repo: ResourceRepository):
    """Updating an unknown or malformed id reports absence."""
    assert await repo.update("42", {"name": "x"}) is None
    assert await repo.update("nope", {"name": "x"}) is None


@pytest.mark.asyncio
async def test_delete_returns_snapshot_then_absent(repo: ResourceRepository):
    """Delete returns the removed record; later lookups report absence."""
    created = await repo.create({"name": "Doomed", "details": "soon"})

    deleted = await repo.delete(created.id)

    assert deleted == created
    assert await repo.get(created.id) is None
    assert await repo.delete(created.id) is None


@pytest.mark.asyncio
async def test_ids_not_reused_after_delete(repo: ResourceRepository):
    """A deleted id is never assigned again."""
    first = await repo.create({"name": "one"})
    second = await repo.create({"name": "two"})
    await repo.delete(second.id)

    third = await repo.create({"name": "three"})

    assert first.id == "1"
    assert third.id == "3"


@pytest.mark.asyncio
async def test_delete_propagates_storage_errors():
    """Storage failures during delete are not reported as not-found."""
    db = AsyncMock(spec=TursoClient)
    db.execute.side_effect = ConnectionError("database unreachable")
    repo = ResourceRepository(db)

    with pytest.raises(ConnectionError):
        await repo.delete("1")


@pytest.mark.asyncio
async def test_unconnected_client_raises(tmp_path):
    """Using a repository before connecting surfaces a storage error."""
    repo = ResourceRepository(TursoClient(url=f"file:{tmp_path / 'unused.db'}"))

    with pytest.raises(RuntimeError, match="Not connected"):
        await repo.get("1")


@pytest.mark.asyncio
async def test_list_offset_beyond_integer_range(repo: ResourceRepository):
    """Offsets too large for SQLite give an empty page with a valid total."""
    await repo.create({"name": "only"})

    page = await repo.list(offset="9" * 25)
    float_page = await repo.list(offset=1e300)

    assert page.total == 1
    assert page.items == []
    assert float_page.total == 1
    assert float_page.items == []


@pytest.mark.asyncio
async def test_list_finds_non_ascii_text(repo: ResourceRepository):
    """Non-ASCII names and details are found by their exact text."""
    await repo.create({"name": "Ärger", "details": "Größe"})
    await repo.create({"name": "plain"})

    by_name = await repo.list(q="Ärger")
    by_details = await repo.list(q="Größe")
    ascii_part = await repo.list(q="RGER")

    assert [item.name for item in by_name.items] == ["Ärger"]
    assert [item.name for item in by_details.items] == ["Ärger"]
    assert [item.name for item in ascii_part.items] == ["Ärger"]


@pytest.mark.asyncio
async def test_update_accepts_naive_clock(db_client: TursoClient):
    """A clock returning naive datetimes is treated as UTC."""
    times = iter([datetime(2024, 3, 1, 9, 0), datetime(2024, 3, 1, 9, 5)])
    repo = ResourceRepository(db_client, clock=lambda: next(times))
    created = await repo.create({"name": "naive"})

    updated = await repo.update(created.id, {"details": "later"})

    assert updated is not None
    assert created.created_at == "2024-03-01T09:00:00.000Z"
    assert updated.updated_at == "2024-03-01T09:05:00.000Z"


@pytest.mark.asyncio
async def test_update_logs_touch_or_changed_fields(repo: ResourceRepository):
    """Empty updates log a touch; real ones log the changed fields."""
    created = await repo.create({"name": "Logged"})

    with capture_logs() as logs:
        await repo.update(created.id, {"name": "  "})
        await repo.update(created.id, {"details": "new"})

    events = [(entry["event"], entry.get("fields")) for entry in logs]
    assert ("resource touched", None) in events
    assert ("resource updated", ["details"]) in events
