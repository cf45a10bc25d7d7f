"""
Pydantic models for produce listings.

A product is owned by a single farmer and starts ``active``.  It
becomes ``sold`` only when the farmer accepts a bid on it, or
``expired`` when the farmer withdraws it.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from ..core.transitions import ProductStatus


class Unit(str, Enum):
    KG = "kg"
    TONNE = "tonne"
    QUINTAL = "quintal"
    LITER = "liter"
    POUND = "pound"
    PIECE = "piece"


class Category(str, Enum):
    GRAINS = "Grains"
    VEGETABLES = "Vegetables"
    FRUITS = "Fruits"
    PULSES = "Pulses"
    DAIRY = "Dairy"
    OTHER = "Other"


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1)
    category: Category
    description: Optional[str] = None
    quantity: float = Field(..., gt=0, description="Quantity must be positive")
    unit: Unit = Unit.KG
    price: float = Field(..., gt=0, description="Price per unit; must be positive")
    location: str = Field(..., min_length=1)
    tags: List[str] = Field(default_factory=list)


class ProductCreate(ProductBase):
    """Schema for listing a new product."""
    pass


class ProductUpdate(BaseModel):
    """Partial product update.

    All fields are optional; only provided fields are changed.  A
    ``status`` value is checked against the product state machine.
    """

    name: Optional[str] = Field(None, min_length=1)
    category: Optional[Category] = None
    description: Optional[str] = None
    quantity: Optional[float] = Field(None, gt=0)
    unit: Optional[Unit] = None
    price: Optional[float] = Field(None, gt=0)
    location: Optional[str] = Field(None, min_length=1)
    tags: Optional[List[str]] = None
    status: Optional[ProductStatus] = None


class ProductRead(ProductBase):
    id: int
    farmer_id: int
    images: List[str] = Field(default_factory=list)
    status: ProductStatus = ProductStatus.ACTIVE
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }
