from typing import Optional
from pydantic import EmailStr, Field
from schemas.base import ORMBase


# Shared properties for team member schemas
class TeamMemberBase(ORMBase):
    first_name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None


class TeamMemberCreate(TeamMemberBase):
    last_name: str = Field(min_length=1)
    role: str = "team"


class TeamMemberUpdate(TeamMemberBase):
    last_name: Optional[str] = Field(None, min_length=1)
    role: Optional[str] = None


# Output schema for team member details
class TeamMemberOut(TeamMemberBase):
    id: str
    last_name: str
    role: str
    full_name: str
