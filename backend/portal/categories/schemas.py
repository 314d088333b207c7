from pydantic import BaseModel
from typing import Optional


class CategoryBase(BaseModel):
    name: str
    description: str = ""


class Category(CategoryBase):
    id: str


class CategoryCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class CategoryDeleteResponse(BaseModel):
    success: bool
