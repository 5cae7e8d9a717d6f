# ============================================================================
# FILE: tunelist/api/router.py
# ============================================================================
from fastapi import APIRouter
from tunelist.api.endpoints import auth, playlists, upload, videos

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(playlists.router, prefix="/playlists", tags=["playlists"])
api_router.include_router(upload.router, prefix="/upload", tags=["upload"])
api_router.include_router(videos.router, prefix="/videos", tags=["videos"])
