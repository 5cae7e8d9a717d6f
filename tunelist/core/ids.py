# ============================================================================
# FILE: tunelist/core/ids.py
# ============================================================================
import time
import uuid


def timestamp_ms() -> int:
    return int(time.time() * 1000)


def generate_id(prefix: str) -> str:
    """Ids like ``playlist_1700000000000_1a2b3c4d``"""
    return f"{prefix}_{timestamp_ms()}_{uuid.uuid4().hex[:8]}"


def generate_filename(extension: str) -> str:
    """Collision-resistant upload name that keeps the original extension"""
    return f"{timestamp_ms()}-{uuid.uuid4()}{extension}"
