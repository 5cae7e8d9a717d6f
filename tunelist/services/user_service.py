# ============================================================================
# FILE: tunelist/services/user_service.py
# ============================================================================
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional
from tunelist.config import settings
from tunelist.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from tunelist.core.ids import generate_id
from tunelist.core.security import get_password_hash, validate_password_strength, verify_password
from tunelist.db.json_store import JsonStore, json_store
from tunelist.db.models.user import User
from tunelist.services.playlist_service import PlaylistService, playlist_service
import logging

logger = logging.getLogger(__name__)

USERS_LOCK_KEY = "users"


class UserService:
    """Service layer for user operations backed by users.json"""

    def __init__(self, store: JsonStore, users_file: Path, playlist_service: PlaylistService):
        self.store = store
        self.users_file = users_file
        self.playlist_service = playlist_service

    def _load(self) -> List[User]:
        return [User.model_validate(raw) for raw in self.store.read(self.users_file, [])]

    def _save(self, users: List[User]) -> None:
        self.store.write(self.users_file, [user.to_record() for user in users])

    @staticmethod
    def _same_username(a: str, b: str) -> bool:
        return a.lower() == b.lower()

    def get_user_by_username(self, username: str) -> Optional[User]:
        """Case-insensitive lookup"""
        for user in self._load():
            if self._same_username(user.username, username):
                return user
        return None

    def get_user(self, user_id: str) -> User:
        for user in self._load():
            if user.id == user_id:
                return user
        raise NotFoundError("User not found")

    def username_exists(self, username: str) -> bool:
        return self.get_user_by_username(username) is not None

    def create_user(
        self,
        username: Optional[str],
        password: Optional[str],
        first_name: Optional[str],
        image_url: Optional[str] = None,
    ) -> User:
        """Register a new account and give it an empty playlist collection"""
        # Stored exactly as typed; lookups compare the raw value too
        username = username or ""
        first_name = (first_name or "").strip()
        if not username.strip() or not password or not first_name:
            raise ValidationError("Username, password, and first name are required")
        validate_password_strength(password)

        with self.store.locked(USERS_LOCK_KEY):
            users = self._load()
            if any(self._same_username(u.username, username) for u in users):
                raise ConflictError("Username already exists")

            user = User(
                id=generate_id("user"),
                username=username,
                password_hash=get_password_hash(password),
                first_name=first_name,
                image_url=image_url or None,
                created_at=datetime.now(timezone.utc),
            )
            users.append(user)
            self._save(users)

        self.playlist_service.init_user(user.id)
        logger.info(f"User created: {user.username} ({user.id})")
        return user

    def authenticate_user(self, username: Optional[str], password: Optional[str]) -> User:
        """Authenticate user with username and password"""
        if not username or not password:
            raise ValidationError("Username and password are required")
        user = self.get_user_by_username(username)
        if not user or not verify_password(password, user.password_hash):
            logger.info(f"Failed login for username: {username}")
            raise AuthError("Invalid username or password")
        return user


# Create singleton instance
user_service = UserService(json_store, settings.users_file, playlist_service)
