from typing import Optional
from pydantic import Field
from schemas.base import ORMBase


# Schema for displaying category details
class CategoryOut(ORMBase):
    id: str
    name: str
    description: Optional[str] = None


class CategoryCreate(ORMBase):
    name: str = Field(min_length=1)
    description: Optional[str] = None


class CategoryUpdate(ORMBase):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
