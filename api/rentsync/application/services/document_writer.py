"""
Escritura de registros normalizados en el almacen de documentos.

Cada registro se escribe con merge-upsert bajo su clave de identidad, de
modo que repetir la corrida mezcla en lugar de duplicar.
"""
from __future__ import annotations

import asyncio
from typing import Callable, Sequence, TypeVar

from loguru import logger

from rentsync.domain.repositories.document_store import IDocumentStore
from rentsync.shared.exceptions.scrape import WriteError

R = TypeVar("R")


async def write_records(
    store: IDocumentStore,
    records: Sequence[R],
    collection: str,
    key_fn: Callable[[R], str],
) -> int:
    """
    Escribe todos los registros de forma concurrente.

    No hay orden entre escrituras ni transaccion: si una falla, las demas
    quedan escritas. Se espera a que todas terminen y luego se levanta el
    primer error (en el orden de los registros).

    Args:
        store: Almacen de documentos
        records: Registros con to_document()
        collection: Colección destino
        key_fn: Funcion que calcula la clave de identidad de cada registro

    Returns:
        int: Cantidad de registros escritos

    Raises:
        WriteError: Si alguna escritura fallo
    """
    keys = [key_fn(record) for record in records]
    results = await asyncio.gather(
        *(
            store.merge_upsert(collection, key, record.to_document())
            for key, record in zip(keys, records)
        ),
        return_exceptions=True,
    )

    errors = [(key, r) for key, r in zip(keys, results) if isinstance(r, BaseException)]
    if errors:
        logger.error(f"{len(errors)}/{len(records)} escrituras fallaron en '{collection}'")
        key, first = errors[0]
        if isinstance(first, WriteError) or not isinstance(first, Exception):
            raise first
        raise WriteError(collection, key, str(first)) from first

    logger.info(f"{len(records)} documento(s) escritos en '{collection}'")
    return len(records)
