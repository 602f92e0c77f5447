"""
Implementación SQL del almacen de documentos.

El merge-upsert es una sola sentencia INSERT ... ON CONFLICT DO UPDATE que
mezcla el JSON existente con el nuevo en la base de datos:
- PostgreSQL: data || excluded.data (JSONB, merge superficial)
- SQLite: json_patch(data, excluded.data)
Otros dialectos usan lectura + merge + escritura dentro de una transacción.
"""
from typing import Any, Dict, Optional

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rentsync.domain.repositories.document_store import IDocumentStore
from rentsync.infrastructure.database.models import DocumentModel
from rentsync.infrastructure.database.session import AsyncSessionLocal
from rentsync.shared.exceptions.scrape import WriteError


class SqlDocumentStore(IDocumentStore):
    """
    Almacen de documentos sobre la tabla `documents`.

    Cada escritura abre su propia sesión, así las escrituras de un lote
    pueden ejecutarse concurrentemente sin compartir estado.
    """

    def __init__(self, session_factory: Optional[async_sessionmaker] = None):
        """
        Args:
            session_factory: Factory de sesiones asincronas. Por defecto la
                de la aplicación (AsyncSessionLocal).
        """
        self._session_factory = session_factory or AsyncSessionLocal

    async def merge_upsert(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        try:
            async with self._session_factory() as session:
                dialect = session.bind.dialect.name
                if dialect == "postgresql":
                    stmt = pg_insert(DocumentModel).values(
                        collection=collection, doc_id=doc_id, data=data
                    )
                    stmt = stmt.on_conflict_do_update(
                        index_elements=[DocumentModel.collection, DocumentModel.doc_id],
                        set_={
                            "data": DocumentModel.data.op("||")(stmt.excluded.data),
                            "updated_at": func.now(),
                        },
                    )
                    await session.execute(stmt)
                elif dialect == "sqlite":
                    stmt = sqlite_insert(DocumentModel).values(
                        collection=collection, doc_id=doc_id, data=data
                    )
                    stmt = stmt.on_conflict_do_update(
                        index_elements=[DocumentModel.collection, DocumentModel.doc_id],
                        set_={
                            "data": func.json_patch(DocumentModel.data, stmt.excluded.data),
                            "updated_at": func.now(),
                        },
                    )
                    await session.execute(stmt)
                else:
                    await self._merge_in_session(session, collection, doc_id, data)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error en merge-upsert {collection}/{doc_id}: {e}")
            raise WriteError(collection, doc_id, str(e)) from e

    async def _merge_in_session(
        self,
        session: AsyncSession,
        collection: str,
        doc_id: str,
        data: Dict[str, Any],
    ) -> None:
        existing = await session.get(DocumentModel, (collection, doc_id))
        if existing is None:
            session.add(DocumentModel(collection=collection, doc_id=doc_id, data=dict(data)))
        else:
            # Reasignar el dict completo para que el ORM detecte el cambio
            existing.data = {**existing.data, **data}
        await session.flush()

    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        async with self._session_factory() as session:
            document = await session.get(DocumentModel, (collection, doc_id))
            return dict(document.data) if document else None

    async def count(self, collection: str) -> int:
        async with self._session_factory() as session:
            result = await session.execute(
                select(func.count())
                .select_from(DocumentModel)
                .where(DocumentModel.collection == collection)
            )
            return int(result.scalar_one())
