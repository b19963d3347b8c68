"""
Tests for CourseService against a real SQLite document store.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from outline_admin.features.courses import (
    Coordinate,
    Course,
    CourseIngestionPipeline,
    CourseRepository,
    CourseService,
    PlaceRecord,
    ThumbnailKind,
    TrackFileParser,
    parse_location_input,
)
from outline_admin.shared.errors import PersistenceFailure


def _service(store, blobs, place=None):
    resolver = MagicMock()
    resolver.resolve = AsyncMock(return_value=place)
    return CourseService(
        CourseRepository(store, "courses"),
        blobs,
        CourseIngestionPipeline(TrackFileParser(), resolver),
    )


# =============================================================================
# Test Drafts
# =============================================================================

class TestDrafts:
    """Tests for in-memory draft editing."""

    def test_new_draft_has_one_blank_hot_spot(self):
        draft = CourseService.new_draft()
        assert draft.id is None
        assert len(draft.hot_spots) == 1
        assert draft.hot_spots[0].title == ""
        assert draft.hot_spots[0].location is None

    def test_add_hot_spot_appends(self):
        draft = CourseService.new_draft()
        location = Coordinate(latitude=37.5, longitude=127.1)
        updated = CourseService.add_hot_spot(draft, "Gate", "Main gate", location)

        assert len(updated.hot_spots) == 2
        assert updated.hot_spots[-1].title == "Gate"
        assert updated.hot_spots[-1].location == location
        assert len(draft.hot_spots) == 1


class TestParseLocationInput:
    """Tests for the 'longitude, latitude' field."""

    def test_valid(self):
        assert parse_location_input("127.1, 37.5") == Coordinate(longitude=127.1, latitude=37.5)

    def test_no_spaces(self):
        assert parse_location_input("127.1,37.5") == Coordinate(longitude=127.1, latitude=37.5)

    @pytest.mark.parametrize("text", ["", "127.1", "a, b", "1, 2, 3", "nan, 1"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_location_input(text)


# =============================================================================
# Test Persistence
# =============================================================================

class TestPersistence:
    """Tests for create / save / load / list."""

    def test_create_and_load(self, open_store, blobs):
        async def run():
            async with open_store() as store:
                service = _service(store, blobs)
                draft = service.new_draft().model_copy(update={"course_name": "Tiger"})
                created = await service.create(draft)
                loaded = await service.load(created.id)
                return draft, created, loaded

        draft, created, loaded = asyncio.run(run())
        assert draft.id is None
        assert created.id
        assert loaded.course_name == "Tiger"
        assert loaded.id == created.id

    def test_load_missing(self, open_store, blobs):
        async def run():
            async with open_store() as store:
                return await _service(store, blobs).load("nope")

        assert asyncio.run(run()) is None

    def test_list_sorted_by_name(self, open_store, blobs):
        async def run():
            async with open_store() as store:
                service = _service(store, blobs)
                for name in ["호랑이", "Zebra", "Apple"]:
                    await service.create(Course(course_name=name))
                return await service.list_courses()

        assert [c.course_name for c in asyncio.run(run())] == ["Apple", "Zebra", "호랑이"]

    def test_ingest_then_save(self, open_store, blobs, sample_kml):
        async def run():
            async with open_store() as store:
                service = _service(store, blobs, PlaceRecord(name="Seoul"))
                created = await service.create(Course(course_name="Tiger"))
                updated = await service.ingest_track(created, sample_kml)
                await service.save(updated)
                return await service.load(created.id)

        loaded = asyncio.run(run())
        assert len(loaded.course_paths) == 3
        assert loaded.location_info.name == "Seoul"

    def test_save_without_id_fails(self, open_store, blobs):
        async def run():
            async with open_store() as store:
                await _service(store, blobs).save(Course(course_name="Ghost"))

        with pytest.raises(PersistenceFailure):
            asyncio.run(run())

    def test_save_unknown_id_fails(self, open_store, blobs):
        async def run():
            async with open_store() as store:
                await _service(store, blobs).save(Course(id="missing", course_name="Ghost"))

        with pytest.raises(PersistenceFailure):
            asyncio.run(run())

    def test_failed_save_keeps_draft(self, blobs):
        """The edited draft survives a rejected write and can be retried."""
        store = MagicMock()
        store.update_document = AsyncMock(side_effect=PersistenceFailure("rejected"))
        service = _service(store, blobs)
        draft = Course(id="abc", course_name="Edited name")

        with pytest.raises(PersistenceFailure):
            asyncio.run(service.save(draft))
        assert draft.course_name == "Edited name"
        assert draft.id == "abc"

    def test_last_write_wins(self, open_store, blobs):
        """Two editors of one course overwrite each other without a conflict check."""
        async def run():
            async with open_store() as store:
                service = _service(store, blobs)
                created = await service.create(Course(course_name="Tiger"))
                editor_a = created.model_copy(update={"description": "from A"})
                editor_b = created.model_copy(update={"course_name": "Tiger B"})
                await service.save(editor_a)
                await service.save(editor_b)
                return await service.load(created.id)

        loaded = asyncio.run(run())
        assert loaded.course_name == "Tiger B"
        assert loaded.description == ""


# =============================================================================
# Test Thumbnails
# =============================================================================

class TestThumbnails:
    """Tests for thumbnail uploads."""

    @pytest.mark.parametrize("kind, attr", [
        (ThumbnailKind.MAIN, "thumbnail"),
        (ThumbnailKind.NEON, "thumbnail_neon"),
        (ThumbnailKind.LONG, "thumbnail_long"),
    ])
    def test_upload_sets_url(self, open_store, blobs, tmp_path, kind, attr):
        async def run():
            async with open_store() as store:
                service = _service(store, blobs)
                return await service.upload_thumbnail(Course(), b"png-bytes", "tiger.png", kind)

        updated = asyncio.run(run())
        assert getattr(updated, attr) == "https://cdn.example.com/thumbnails/tiger.png"
        assert (tmp_path / "blobs" / "thumbnails" / "tiger.png").read_bytes() == b"png-bytes"
