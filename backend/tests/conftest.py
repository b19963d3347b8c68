"""
Shared fixtures.

Async code is driven with asyncio.run(); stores are opened inside the
coroutine so the engine never outlives its event loop.
"""

from contextlib import asynccontextmanager

import httpx
import pytest

from outline_admin.db.session import create_engine_for, create_session_factory, init_db
from outline_admin.features.courses import Coordinate, PlaceResolver
from outline_admin.storage import LocalBlobStore, SQLDocumentStore


SAMPLE_KML = """<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <name>Tiger</name>
    <Placemark>
      <LineString>
        <coordinates>
          126.9769,37.5759,0 126.9780,37.5765,0 126.9791,37.5771,0
        </coordinates>
      </LineString>
    </Placemark>
  </Document>
</kml>
"""

GEOCODE_RESPONSE = {
    "results": [
        {
            "formatted_address": "175 Sejong-daero, Jongno-gu, Seoul, South Korea",
            "address_components": [
                {"long_name": "175", "short_name": "175", "types": ["street_number"]},
                {"long_name": "Sejong-daero", "short_name": "Sejong-daero", "types": ["route"]},
                {
                    "long_name": "Jongno-gu",
                    "short_name": "Jongno-gu",
                    "types": ["political", "sublocality", "sublocality_level_1"],
                },
                {"long_name": "Seoul", "short_name": "Seoul", "types": ["locality", "political"]},
                {
                    "long_name": "Seoul",
                    "short_name": "Seoul",
                    "types": ["administrative_area_level_1", "political"],
                },
                {"long_name": "South Korea", "short_name": "KR", "types": ["country", "political"]},
            ],
        },
        {"formatted_address": "Jongno-gu, Seoul, South Korea", "address_components": []},
    ],
    "status": "OK",
}


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'outline.db'}"


@pytest.fixture
def open_store(database_url):
    """Async context manager yielding a fresh SQLDocumentStore."""

    @asynccontextmanager
    async def _open():
        engine = create_engine_for(database_url)
        await init_db(engine)
        try:
            yield SQLDocumentStore(create_session_factory(engine))
        finally:
            await engine.dispose()

    return _open


@pytest.fixture
def blobs(tmp_path):
    return LocalBlobStore(tmp_path / "blobs", "https://cdn.example.com/")


@pytest.fixture
def seoul():
    return Coordinate(latitude=37.5759, longitude=126.9769)


@pytest.fixture
def make_resolver():
    """
    Build a PlaceResolver whose HTTP calls go to a handler.

    The handler receives the httpx.Request and returns an httpx.Response.
    Must be called inside the running event loop.
    """

    def _make(handler):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return PlaceResolver(
            api_key="test-key",
            api_url="https://geo.example.com/geocode",
            language="",
            client=client,
        )

    return _make


@pytest.fixture
def sample_kml():
    return SAMPLE_KML


@pytest.fixture
def geocode_response():
    return GEOCODE_RESPONSE
