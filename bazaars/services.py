# bazaars/services.py
from sqlalchemy.orm import Session
from typing import Iterable, List, Optional, Tuple
from . import crud, schemas
from .images import LocalImageStore
from .models import Ad
from .utils import logger

# (file name, raw bytes, mime type) as received from a multipart form
Upload = Tuple[str, bytes, str]

def _discard(store: LocalImageStore, image_ids: Iterable[str]):
    for image_id in image_ids:
        store.delete(image_id, missing_ok=True)

def _store_uploads(store: LocalImageStore, uploads: Iterable[Upload]) -> List[str]:
    image_ids = []
    try:
        for name, data, mime in uploads:
            image_ids.append(store.save(name, data, mime))
    except Exception:
        _discard(store, image_ids)
        raise
    return image_ids

def publish_ad(db: Session, store: LocalImageStore, content: schemas.AdCreate, uploads: Iterable[Upload] = ()) -> Ad:
    image_ids = _store_uploads(store, uploads)
    try:
        obj = crud.create_ad(db, content.model_dump(), image_ids=image_ids)
    except Exception:
        # no row references the fresh uploads
        db.rollback()
        _discard(store, image_ids)
        raise
    logger.info("Published ad %s with %d image(s)", obj.id, len(image_ids))
    return obj

def replace_ad(
    db: Session,
    store: LocalImageStore,
    ad_id: int,
    content: schemas.AdCreate,
    keep_image_ids: Iterable[str] = (),
    uploads: Iterable[Upload] = (),
) -> Optional[Ad]:
    """Overwrite an ad's content and image list.

    ``keep_image_ids`` must be images the ad already references; they keep
    their order and new uploads are appended after them. Images the ad no
    longer references are removed from the store once the row is saved.
    """
    obj = crud.get_ad(db, ad_id)
    if not obj:
        return None
    current = list(obj.images or [])
    keep = list(keep_image_ids)
    unknown = [i for i in keep if i not in current]
    if unknown:
        raise ValueError(f"images not attached to ad {ad_id}: {', '.join(unknown)}")
    new_ids = _store_uploads(store, uploads)
    updates = content.model_dump()
    updates["images"] = keep + new_ids
    try:
        obj = crud.update_ad(db, ad_id, updates)
    except Exception:
        db.rollback()
        _discard(store, new_ids)
        raise
    _discard(store, [i for i in current if i not in keep])
    logger.info("Replaced ad %s (%d kept, %d new image(s))", ad_id, len(keep), len(new_ids))
    return obj

def remove_ad(db: Session, store: LocalImageStore, ad_id: int) -> bool:
    obj = crud.get_ad(db, ad_id)
    if not obj:
        return False
    image_ids = list(obj.images or [])
    crud.delete_ad(db, ad_id)
    _discard(store, image_ids)
    logger.info("Removed ad %s", ad_id)
    return True
