# ============================================================================
# FILE: tunelist/schemas/user.py
# ============================================================================
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional


class UserCreate(BaseModel):
    """Schema for user registration (presence is checked by the service)"""
    username: Optional[str] = None
    password: Optional[str] = None
    first_name: Optional[str] = None
    image_url: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class UserLogin(BaseModel):
    """Schema for user login"""
    username: Optional[str] = None
    password: Optional[str] = None
