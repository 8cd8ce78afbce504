"""Catalog record ORM model."""

from decimal import Decimal

from sqlalchemy import CheckConstraint, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from catalog.infrastructure.persistence.database import Base
from catalog.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class CatalogRecord(CuidMixin, TimestampMixin, Base):
    """Catalog record. Table: catalog_record. image is nullable."""

    __tablename__ = "catalog_record"

    name: Mapped[str] = mapped_column(String, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False, index=True)
    image: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        CheckConstraint("price >= 0", name="catalog_record_price_non_negative"),
    )
