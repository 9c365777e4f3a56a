from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict
from typing import Any, List, Optional
from datetime import datetime

from .utils import to_number


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class CategoryCreate(BaseModel):
    name: Optional[str] = None


class CategoryRead(BaseModel):
    id: int
    name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ProductCreate(BaseModel):
    name: str = ""
    price: float = 0
    category_id: int = 0
    has_sweetness: bool = False


class ProductRead(BaseModel):
    id: int
    name: str
    price: float
    category_id: Optional[int] = None
    icon: str
    has_sweetness: bool
    category_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class OrderCreate(BaseModel):
    items: List[Any] = Field(default_factory=list)
    total: float = 0

    @field_validator("items", mode="before")
    @classmethod
    def null_items_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("total", mode="before")
    @classmethod
    def coerce_total(cls, v: Any) -> float:
        # the client-supplied total is trusted as-is; garbage becomes 0
        return to_number(v)


class OrderRead(BaseModel):
    id: int
    items: List[Any]
    total: float
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DailySale(BaseModel):
    sale_date: str
    total: float
