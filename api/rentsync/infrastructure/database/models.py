"""
Modelos de base de datos (ORM).
"""
from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func

from rentsync.infrastructure.database.session import Base


class DocumentModel(Base):
    """
    Documento JSON direccionado por (colección, clave).

    Emula un document store sobre una tabla relacional: cada colección
    (rents, units, floorplans) es un valor de `collection` y el cuerpo del
    documento vive en `data`. En PostgreSQL se usa JSONB para poder mezclar
    documentos con el operador ||.
    """
    
    __tablename__ = "documents"
    
    collection = Column(String(64), primary_key=True)
    doc_id = Column(String(255), primary_key=True)
    data = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    
    def __repr__(self):
        return f"<Document(collection={self.collection}, doc_id={self.doc_id})>"
