"""
Persistence model for keyed JSON documents.
Each top-level collection (installations, clients, statusConfig) and each installer
report (report_{clientName}) is stored as one row.
"""
from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from solarview.core.database import Base


class StoredDocument(Base):
    """A whole collection serialized as JSON, replaced wholesale on every save."""

    __tablename__ = "documentos"

    key: Mapped[str] = mapped_column("chave", String(255), primary_key=True)
    payload: Mapped[str] = mapped_column("conteudo", Text, nullable=False)  # Serialized JSON
    updated_at: Mapped[datetime] = mapped_column(
        "atualizado_em",
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    def __repr__(self):
        return f"<StoredDocument(key={self.key}, size={len(self.payload)})>"
