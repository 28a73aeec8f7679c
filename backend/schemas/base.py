# backend/schemas/base.py
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# Base configuration shared by every API schema.
# The alias generator is the single camelCase <-> snake_case mapping between
# the JSON payloads and the ORM columns; snake_case names are still accepted
# on input.
class ORMBase(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# Structured outcome for delete requests
class DeleteResult(ORMBase):
    success: bool
    message: Optional[str] = None
