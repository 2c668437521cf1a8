# bazaars/crud.py
"""CRUD operations for `Ad` rows.

All helpers take an open `Session` and commit their own work. Timestamps
are owned here: `created_at` is written once on insert, `updated_at` is
refreshed on every update and never moves backwards.
"""
from sqlalchemy import and_
from sqlalchemy.orm import Session
from typing import Any, Dict, Iterator, List, Optional
from .models import Ad
from .utils import utcnow

# columns callers may never overwrite through update_ad
PROTECTED_FIELDS = ("id", "created_at", "updated_at")

SORT_COLUMNS = {
    "price": Ad.price,
    "updated_at": Ad.updated_at,
}

def create_ad(db: Session, data: Dict[str, Any], image_ids: Optional[List[Any]] = None) -> Ad:
    now = utcnow()
    values = {k: v for k, v in data.items() if k not in PROTECTED_FIELDS}
    values.setdefault("status", "active")
    obj = Ad(**values, created_at=now, updated_at=now)
    if image_ids is not None:
        obj.images = list(image_ids)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj

def get_ad(db: Session, ad_id: int) -> Optional[Ad]:
    return db.get(Ad, ad_id)

def _filtered(db: Session, filters: Optional[Dict[str, Any]]):
    q = db.query(Ad)
    if not filters:
        return q
    conds = []
    if filters.get("title_contains"):
        conds.append(Ad.title.ilike(f"%{filters['title_contains']}%"))
    if filters.get("description_contains"):
        conds.append(Ad.description.ilike(f"%{filters['description_contains']}%"))
    if filters.get("price_lt") is not None:
        conds.append(Ad.price < filters["price_lt"])
    if filters.get("price_gt") is not None:
        conds.append(Ad.price > filters["price_gt"])
    if filters.get("updated_at_lt") is not None:
        conds.append(Ad.updated_at < filters["updated_at_lt"])
    if filters.get("updated_at_gt") is not None:
        conds.append(Ad.updated_at > filters["updated_at_gt"])
    if filters.get("status") is not None:
        conds.append(Ad.status == filters["status"])
    if filters.get("top_ad") is not None:
        conds.append(Ad.top_ad == filters["top_ad"])
    if conds:
        q = q.filter(and_(*conds))
    return q

def _ordering(sort: Optional[str]):
    if not sort:
        # promoted listings first, then freshest
        return (Ad.top_ad.desc(), Ad.updated_at.desc(), Ad.id.desc())
    column = SORT_COLUMNS.get(sort.lstrip("-"))
    if column is None:
        raise ValueError(f"unsupported sort key: {sort}")
    if sort.startswith("-"):
        return (column.desc(), Ad.id.desc())
    return (column.asc(), Ad.id.asc())

def list_ads(db: Session, skip: int = 0, limit: int = 10, filters: Dict = None, sort: Optional[str] = None):
    order = _ordering(sort)
    q = _filtered(db, filters)
    total = q.count()
    items = q.order_by(*order).offset(skip).limit(limit).all()
    return {"total": total, "items": items}

def iter_ads(db: Session, filters: Dict = None, batch_size: int = 100) -> Iterator[Ad]:
    """Stream matching ads in id order without loading them all at once.

    On PostgreSQL ``yield_per`` runs over a server-side cursor, fetching
    ``batch_size`` rows per round trip.
    """
    q = _filtered(db, filters).order_by(Ad.id.asc())
    yield from q.yield_per(batch_size)

def update_ad(db: Session, ad_id: int, updates: Dict[str, Any]) -> Optional[Ad]:
    obj = db.get(Ad, ad_id)
    if not obj:
        return None
    for k, v in updates.items():
        if k in PROTECTED_FIELDS:
            continue
        setattr(obj, k, v)
    obj.updated_at = max(utcnow(), obj.updated_at)
    db.commit()
    db.refresh(obj)
    return obj

def delete_ad(db: Session, ad_id: int) -> bool:
    obj = db.get(Ad, ad_id)
    if not obj:
        return False
    db.delete(obj)
    db.commit()
    return True
