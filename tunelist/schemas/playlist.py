# ============================================================================
# FILE: tunelist/schemas/playlist.py
# ============================================================================
from pydantic import BaseModel
from typing import Optional


class PlaylistCreate(BaseModel):
    """Schema for creating a playlist"""
    name: Optional[str] = None


class RatingUpdate(BaseModel):
    """Schema for updating a song rating (no range check, see DESIGN.md)"""
    rating: int
