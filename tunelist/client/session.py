# ============================================================================
# FILE: tunelist/client/session.py
# ============================================================================
from typing import Any, Dict, Optional
from tunelist.client.api_client import ApiClient
from tunelist.client.repository import PlaylistRepository
from tunelist.core.errors import AuthError
import logging

logger = logging.getLogger(__name__)


class ClientSession:
    """The logged-in user on the client side, plus that user's playlist cache"""

    def __init__(self, api: ApiClient):
        self.api = api
        self.current_user: Optional[Dict[str, Any]] = None
        self.playlists = PlaylistRepository(self)

    @property
    def is_logged_in(self) -> bool:
        return self.current_user is not None

    def require_user(self) -> Dict[str, Any]:
        if self.current_user is None:
            raise AuthError("Not logged in")
        return self.current_user

    def register(self, username: str, password: str, first_name: str, image_url: Optional[str] = None) -> Dict[str, Any]:
        """Create an account; the caller logs in separately"""
        return self.api.register(username, password, first_name, image_url)

    def login(self, username: str, password: str) -> Dict[str, Any]:
        result = self.api.login(username, password)
        if result.get("success"):
            self.current_user = result["user"]
            self.playlists.invalidate()
            logger.info(f"Logged in as {self.current_user.get('username')}")
        return result

    def logout(self) -> None:
        """Clear the session even if the server cannot be reached"""
        self.api.logout()
        self.current_user = None
        self.playlists.invalidate()
