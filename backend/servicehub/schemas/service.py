from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ServiceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    description: Optional[str] = None
    category: Optional[str] = None
    price: float = Field(..., ge=0)
    duration: int = Field(60, gt=0)            # minutes
    active: bool = True


class ServiceUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    description: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    duration: Optional[int] = Field(None, gt=0)
    active: Optional[bool] = None


class ServiceOut(BaseModel):
    id: str
    provider: str
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    price: float
    duration: int
    active: bool
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
