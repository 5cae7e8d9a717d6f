# ============================================================================
# FILE: tunelist/api/endpoints/upload.py
# ============================================================================
from fastapi import APIRouter, Depends, File, UploadFile, status
from typing import Optional
from tunelist.api.dependencies import get_upload_service
from tunelist.services.upload_service import UploadService

router = APIRouter()


@router.post("/{user_id}/{playlist_id}", status_code=status.HTTP_201_CREATED)
async def upload_mp3(
    user_id: str,
    playlist_id: str,
    mp3file: Optional[UploadFile] = File(None),
    uploads: UploadService = Depends(get_upload_service)
):
    """
    Upload an MP3 (multipart field ``mp3file``) and add it to a playlist
    """
    song = await uploads.upload_to_playlist(user_id, playlist_id, mp3file)
    return {
        "success": True,
        "message": "File uploaded successfully",
        "song": song.to_record()
    }
