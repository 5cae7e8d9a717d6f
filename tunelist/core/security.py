# ============================================================================
# FILE: tunelist/core/security.py
# ============================================================================
import re
from werkzeug.security import generate_password_hash, check_password_hash
from tunelist.core.errors import ValidationError

MIN_PASSWORD_LENGTH = 6


def get_password_hash(password: str) -> str:
    """Salted hash suitable for storing in users.json"""
    return generate_password_hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    return check_password_hash(hashed_password, plain_password)


def validate_password_strength(password: str) -> None:
    """Raise ValidationError naming the first rule the password breaks"""
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if not re.search(r"[a-zA-Z]", password):
        raise ValidationError("Password must contain at least one letter")
    if not re.search(r"[0-9]", password):
        raise ValidationError("Password must contain at least one number")
    if not re.search(r"[^a-zA-Z0-9]", password):
        raise ValidationError("Password must contain at least one special character")
