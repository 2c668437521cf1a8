# bazaars/models.py
"""SQLAlchemy ORM model for the ``ads`` table.

Must stay column-for-column identical to the ``create_ads`` migration.
"""
from sqlalchemy import Column, Integer, String, Text, Numeric, Boolean, DateTime, JSON, Index, false, text
from sqlalchemy.dialects.postgresql import JSONB
from .db import Base

# JSONB on PostgreSQL, plain JSON on other engines
ImageList = JSON().with_variant(JSONB(), "postgresql")

class Ad(Base):
    __tablename__ = "ads"
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    status = Column(String(50), nullable=False)
    user_email = Column(String(255), nullable=False)
    user_phone = Column(String(50), nullable=False)
    created_at = Column(DateTime(timezone=False), nullable=False)
    updated_at = Column(DateTime(timezone=False), nullable=False)
    top_ad = Column(Boolean, nullable=False, server_default=false())
    images = Column(ImageList, nullable=False, server_default=text("'[]'"))

    def __repr__(self):
        return f"<Ad id={self.id} title={self.title!r} status={self.status!r}>"

Index("idx_ads_price", Ad.price)
Index("idx_ads_status", Ad.status)
Index("idx_ads_updated_at", Ad.updated_at)
Index("idx_ads_top_ad", Ad.top_ad)
