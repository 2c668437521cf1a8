# bazaars/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional
from datetime import datetime
from decimal import Decimal

class AdBase(BaseModel):
    title: str = Field(..., max_length=255)
    description: str
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    user_email: str = Field(..., max_length=255)
    user_phone: str = Field(..., max_length=50)
    top_ad: bool = False

class AdCreate(AdBase):
    status: str = Field("active", max_length=50)

class AdUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    status: Optional[str] = Field(None, max_length=50)
    user_email: Optional[str] = Field(None, max_length=255)
    user_phone: Optional[str] = Field(None, max_length=50)
    top_ad: Optional[bool] = None

class AdOut(BaseModel):
    # mirrors stored rows, no input constraints
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    price: Decimal
    status: str
    user_email: str
    user_phone: str
    created_at: datetime
    updated_at: datetime
    top_ad: bool
    images: List[Any]

class AdFilter(BaseModel):
    title_contains: Optional[str] = None
    description_contains: Optional[str] = None
    price_lt: Optional[Decimal] = None
    price_gt: Optional[Decimal] = None
    updated_at_lt: Optional[datetime] = None
    updated_at_gt: Optional[datetime] = None
    status: Optional[str] = None
    top_ad: Optional[bool] = None

class AdPage(BaseModel):
    page: int
    total: int
    items: List[AdOut]
