# bazaars/api/routes.py
from datetime import datetime
from decimal import Decimal
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Response, UploadFile
from pydantic import ValidationError
from sqlalchemy.orm import Session
from typing import List, Optional
from .. import crud, schemas, services
from ..db import get_db
from ..images import ImageNotFound, LocalImageStore
from ..utils import logger

router = APIRouter()

def get_image_store() -> LocalImageStore:
    return LocalImageStore()

def _ad_content(**fields) -> schemas.AdCreate:
    try:
        return schemas.AdCreate(**{k: v for k, v in fields.items() if v is not None})
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

def _uploads(images: List[UploadFile]):
    return [
        (img.filename or "upload", img.file.read(), img.content_type or "application/octet-stream")
        for img in images
    ]

@router.get("/health")
def health():
    return {"status": "ok"}

@router.get("/ads", response_model=schemas.AdPage)
def list_ads(
    offset: int = Query(0, ge=0),
    per_page: int = Query(10, ge=1, le=100),
    title_contains: Optional[str] = Query(None),
    description_contains: Optional[str] = Query(None),
    price_lt: Optional[Decimal] = Query(None),
    price_gt: Optional[Decimal] = Query(None),
    updated_at_lt: Optional[datetime] = Query(None),
    updated_at_gt: Optional[datetime] = Query(None),
    status: Optional[str] = Query(None),
    top_ad: Optional[bool] = Query(None),
    sort: Optional[str] = Query(None, pattern=r"^-?(price|updated_at)$"),
    db: Session = Depends(get_db)
):
    filters = schemas.AdFilter(
        title_contains=title_contains,
        description_contains=description_contains,
        price_lt=price_lt,
        price_gt=price_gt,
        updated_at_lt=updated_at_lt,
        updated_at_gt=updated_at_gt,
        status=status,
        top_ad=top_ad,
    )
    res = crud.list_ads(db, skip=offset, limit=per_page, filters=filters.model_dump(exclude_none=True), sort=sort)
    return {"page": offset // per_page + 1, "total": res["total"], "items": res["items"]}


@router.get("/ads/{ad_id}", response_model=schemas.AdOut)
def get_ad(ad_id: int, db: Session = Depends(get_db)):
    obj = crud.get_ad(db, ad_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Ad not found")
    return obj


@router.post("/ads", response_model=schemas.AdOut, status_code=201)
def create_ad(
    title: str = Form(...),
    description: str = Form(...),
    price: str = Form(...),
    user_email: str = Form(...),
    user_phone: str = Form(...),
    top_ad: bool = Form(False),
    status: Optional[str] = Form(None),
    images: List[UploadFile] = File(default=[]),
    db: Session = Depends(get_db),
    store: LocalImageStore = Depends(get_image_store),
):
    content = _ad_content(
        title=title, description=description, price=price,
        user_email=user_email, user_phone=user_phone, top_ad=top_ad, status=status,
    )
    return services.publish_ad(db, store, content, _uploads(images))


@router.put("/ads/{ad_id}", response_model=schemas.AdOut)
def replace_ad(
    ad_id: int,
    title: str = Form(...),
    description: str = Form(...),
    price: str = Form(...),
    user_email: str = Form(...),
    user_phone: str = Form(...),
    top_ad: bool = Form(False),
    status: Optional[str] = Form(None),
    image_ids: List[str] = Form(default=[]),
    images: List[UploadFile] = File(default=[]),
    db: Session = Depends(get_db),
    store: LocalImageStore = Depends(get_image_store),
):
    content = _ad_content(
        title=title, description=description, price=price,
        user_email=user_email, user_phone=user_phone, top_ad=top_ad, status=status,
    )
    try:
        obj = services.replace_ad(db, store, ad_id, content, keep_image_ids=image_ids, uploads=_uploads(images))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not obj:
        raise HTTPException(status_code=404, detail="Ad not found")
    return obj


@router.patch("/ads/{ad_id}", response_model=schemas.AdOut)
def update_ad(ad_id: int, payload: schemas.AdUpdate, db: Session = Depends(get_db)):
    obj = crud.update_ad(db, ad_id, updates=payload.model_dump(exclude_unset=True, exclude_none=True))
    if not obj:
        raise HTTPException(status_code=404, detail="Ad not found")
    return obj


@router.delete("/ads/{ad_id}")
def delete_ad(ad_id: int, db: Session = Depends(get_db), store: LocalImageStore = Depends(get_image_store)):
    ok = services.remove_ad(db, store, ad_id)
    if not ok:
        raise HTTPException(status_code=404, detail="Ad not found")
    return {"status": "deleted"}


@router.get("/images/{image_id}")
def get_image(image_id: str, store: LocalImageStore = Depends(get_image_store)):
    try:
        image = store.get(image_id)
    except ImageNotFound:
        logger.warning("Image %s not found", image_id)
        raise HTTPException(status_code=404, detail="Image not found")
    return Response(content=image.data, media_type=image.mime_type)
