"""Order SQLAlchemy model"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, Index, Integer, Numeric, Text, Uuid

from .base import Base


class Order(Base):
    """Persisted book order.

    Rows are written by the order-creation flow once a draft has passed
    validation. The existence oracle only reads this table.
    """
    __tablename__ = "order"
    __table_args__ = (
        Index("ix_order_title_author", "title", "author"),
        Index("ix_order_isbn", "isbn"),
        Index("ix_order_published_date", "published_date"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(Text, nullable=False)
    author = Column(Text, nullable=False)
    isbn = Column(Text, nullable=False)
    category = Column(Text, nullable=False)
    price = Column(Numeric(precision=10, scale=2), nullable=False)
    published_date = Column(Date, nullable=False)
    cover_image_url = Column(Text, nullable=True)
    stock_quantity = Column(Integer, nullable=False, default=0)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
