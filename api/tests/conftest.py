"""
Configuración de fixtures para pytest.
"""
import os

# La configuracion se lee al importar rentsync: apuntar a SQLite antes.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./rentsync_test.db")
os.environ.setdefault("SCHEDULER_ENABLED", "false")

import json
from typing import Any, AsyncGenerator, Callable, Dict, List, Optional, Tuple

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from rentsync.domain.repositories.document_store import IDocumentStore
from rentsync.infrastructure.database.session import Base
from rentsync.infrastructure.database.models import DocumentModel  # noqa: F401


HOME_PAGE_URL = "https://www.example-apartments.com/"
API_BASE_URL = "https://api.example-realpage.com/v1"
API_KEY = "k3y-abc123"


class InMemoryDocumentStore(IDocumentStore):
    """Almacen en memoria con la misma semantica de merge que el SQL."""

    def __init__(self) -> None:
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.writes: List[Tuple[str, str]] = []

    async def merge_upsert(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        documents = self.collections.setdefault(collection, {})
        documents[doc_id] = {**documents.get(doc_id, {}), **data}
        self.writes.append((collection, doc_id))

    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        document = self.collections.get(collection, {}).get(doc_id)
        return dict(document) if document is not None else None

    async def count(self, collection: str) -> int:
        return len(self.collections.get(collection, {}))


@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker, None]:
    """
    Factory de sesiones sobre un SQLite en archivo temporal.

    Se usa archivo (no :memory:) porque cada escritura abre su propia
    conexion y todas deben ver la misma base.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'documents.db'}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def raw_unit() -> Dict[str, Any]:
    """Unidad con la estructura real de /units de RealPage (campos relevantes)."""
    return {
        "id": "99001",
        "name": "101",
        "floorNumber": 1,
        "squareFeet": 850,
        "floorplanId": "7",
        "rent": 1500,
        "leaseStatus": "AVAILABLE",
        "rentModifiedTimestamp": "2024-01-15 10:30 +0000",
    }


@pytest.fixture
def raw_floorplan() -> Dict[str, Any]:
    """Plano con la estructura real de /floorplans de RealPage."""
    return {
        "id": "3",
        "name": "The Juniper",
        "bedRooms": 2,
        "bathRooms": 1.5,
        "floorPlanImages": [
            {"mediaId": "m1", "maxWidth": 400, "maxHeight": 300},
            {"mediaId": "m2", "maxWidth": 800, "maxHeight": 600},
        ],
    }


@pytest.fixture
def realpage_transport(
    raw_unit: Dict[str, Any], raw_floorplan: Dict[str, Any]
) -> Callable[..., httpx.MockTransport]:
    """
    Construye un MockTransport que simula la pagina principal y la API.

    Registra cada request recibido en `transport.requests`.
    """

    def build(
        *,
        home_html: Optional[str] = None,
        units: Optional[List[Dict[str, Any]]] = None,
        floorplans: Optional[List[Dict[str, Any]]] = None,
        status_overrides: Optional[Dict[str, int]] = None,
    ) -> httpx.MockTransport:
        html = home_html if home_html is not None else (
            "<html><script>window.config = { apiKey: '" + API_KEY + "', siteId: 8448226 };</script></html>"
        )
        unit_list = units if units is not None else [raw_unit]
        floorplan_list = floorplans if floorplans is not None else [raw_floorplan]
        overrides = status_overrides or {}
        requests: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            path = request.url.path
            if path in overrides:
                return httpx.Response(overrides[path], text="error")
            if str(request.url) == HOME_PAGE_URL:
                return httpx.Response(200, text=html)
            if path.endswith("/floorplans"):
                return httpx.Response(200, json={"response": {"floorplans": floorplan_list}})
            if path.endswith("/units"):
                return httpx.Response(200, json={"response": {"units": unit_list}})
            return httpx.Response(404, text=json.dumps({"error": "not found"}))

        transport = httpx.MockTransport(handler)
        transport.requests = requests
        return transport

    return build
