# ============================================================================
# FILE: tunelist/services/upload_service.py
# Stores uploaded MP3 files and turns them into local playlist songs
# ============================================================================
from pathlib import Path
from typing import Optional
from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool
from tunelist.config import settings
from tunelist.core.errors import TooLargeError, UnsupportedTypeError, ValidationError
from tunelist.core.ids import generate_filename, generate_id
from tunelist.db.models.playlist import LocalSong
from tunelist.services.playlist_service import PlaylistService, playlist_service
import logging

logger = logging.getLogger(__name__)

MP3_MIME_TYPES = {"audio/mpeg", "audio/mp3"}
UPLOADS_URL_PREFIX = "/uploads"


class UploadService:
    """Service layer for MP3 uploads"""

    def __init__(
        self,
        upload_dir: Path,
        playlist_service: PlaylistService,
        max_size: int,
        chunk_size: int = 1024 * 1024,
    ):
        self.upload_dir = upload_dir
        self.playlist_service = playlist_service
        self.max_size = max_size
        self.chunk_size = chunk_size

    @staticmethod
    def is_mp3(filename: Optional[str], content_type: Optional[str]) -> bool:
        if content_type and content_type.lower() in MP3_MIME_TYPES:
            return True
        return bool(filename) and filename.lower().endswith(".mp3")

    @staticmethod
    def title_from_filename(filename: str) -> str:
        name = Path(filename).name
        if name.lower().endswith(".mp3"):
            name = name[:-4]
        return name

    def discard(self, path: Path) -> None:
        try:
            path.unlink()
            logger.info(f"Discarded upload: {path.name}")
        except FileNotFoundError:
            pass

    async def save_mp3(self, file: Optional[UploadFile]) -> Path:
        """
        Write an uploaded MP3 into the upload directory under a generated name.

        The size limit is enforced while streaming, so an oversized upload
        never stays on disk.
        """
        if file is None or not file.filename:
            raise ValidationError("No file uploaded or invalid file type")
        if not self.is_mp3(file.filename, file.content_type):
            raise UnsupportedTypeError("Only MP3 files are allowed!")

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        target = self.upload_dir / generate_filename(Path(file.filename).suffix)
        written = 0
        try:
            with open(target, "wb") as out:
                while True:
                    chunk = await file.read(self.chunk_size)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_size:
                        raise TooLargeError(
                            f"File too large. Maximum size is {self.max_size // (1024 * 1024)}MB."
                        )
                    out.write(chunk)
        except Exception:
            self.discard(target)
            raise

        logger.info(f"Stored upload {file.filename} as {target.name} ({written} bytes)")
        return target

    async def upload_to_playlist(self, user_id: str, playlist_id: str, file: Optional[UploadFile]) -> LocalSong:
        """Store the file and append it to the playlist as a local song"""
        stored = await self.save_mp3(file)
        song = LocalSong(
            local_id=generate_id("local"),
            title=self.title_from_filename(file.filename),
            file_path=f"{UPLOADS_URL_PREFIX}/{stored.name}",
        )
        try:
            return await run_in_threadpool(
                self.playlist_service.add_song_to_playlist, user_id, playlist_id, song
            )
        except Exception:
            # Playlist rejected the song; drop the orphaned file
            self.discard(stored)
            raise


# Create singleton instance
upload_service = UploadService(
    settings.upload_dir,
    playlist_service,
    max_size=settings.MAX_UPLOAD_SIZE,
    chunk_size=settings.UPLOAD_CHUNK_SIZE,
)
