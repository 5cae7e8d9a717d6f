# ============================================================================
# FILE: tunelist/db/models/playlist.py
# ============================================================================
from abc import ABC, abstractmethod
from pydantic import BaseModel, Discriminator, Field, Tag, TypeAdapter
from pydantic.alias_generators import to_camel
from typing import Annotated, Any, List, Literal, Optional, Union
from datetime import datetime

LOCAL_SONG_THUMBNAIL = "images/mp3-thumbnail.svg"


class SongBase(BaseModel, ABC):
    """Fields shared by remote and local songs"""
    title: str = ""
    thumbnail: Optional[str] = None
    duration: Optional[Union[str, int]] = None
    rating: int = 0
    added_at: Optional[datetime] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @property
    @abstractmethod
    def song_id(self) -> str:
        """videoId for remote songs, localId for local ones"""

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class RemoteSong(SongBase):
    """Reference to a video in the external catalog"""
    video_id: str = Field(min_length=1)
    channel_title: Optional[str] = None

    @property
    def song_id(self) -> str:
        return self.video_id


class LocalSong(SongBase):
    """Reference to an uploaded MP3 served from /uploads"""
    local_id: str = Field(min_length=1)
    is_local: Literal[True] = True
    file_path: str
    thumbnail: Optional[str] = LOCAL_SONG_THUMBNAIL
    duration: Optional[Union[str, int]] = "MP3"

    @property
    def song_id(self) -> str:
        return self.local_id


def _song_kind(value: Any) -> str:
    if isinstance(value, SongBase):
        return "local" if isinstance(value, LocalSong) else "remote"
    if isinstance(value, dict):
        is_local = value.get("isLocal", value.get("is_local"))
        if is_local is not None:
            return "local" if is_local else "remote"
        if value.get("localId") or value.get("local_id"):
            return "local"
    return "remote"


Song = Annotated[
    Union[Annotated[RemoteSong, Tag("remote")], Annotated[LocalSong, Tag("local")]],
    Discriminator(_song_kind),
]

song_adapter = TypeAdapter(Song)


class Playlist(BaseModel):
    """Playlist record as stored in playlists/<user_id>.json"""
    id: str
    name: str
    songs: List[Song] = []
    created_at: datetime

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def find_song(self, song_id: str) -> Optional[Union[RemoteSong, LocalSong]]:
        for song in self.songs:
            if song.song_id == song_id:
                return song
        return None

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
