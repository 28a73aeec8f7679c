from typing import Optional
from pydantic import Field
from schemas.base import ORMBase


# Schema for displaying depot details
class DepotOut(ORMBase):
    id: str
    name: str
    address: Optional[str] = None


class DepotCreate(ORMBase):
    name: str = Field(min_length=1)
    address: Optional[str] = None


class DepotUpdate(ORMBase):
    name: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = None
