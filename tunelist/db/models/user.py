# ============================================================================
# FILE: tunelist/db/models/user.py
# ============================================================================
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime


class User(BaseModel):
    """User record as stored in users.json"""
    id: str
    username: str
    password_hash: str
    first_name: str
    image_url: Optional[str] = None
    created_at: datetime

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def to_public(self) -> dict:
        """JSON representation without the password hash"""
        return self.model_dump(mode="json", by_alias=True, exclude={"password_hash"})

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
