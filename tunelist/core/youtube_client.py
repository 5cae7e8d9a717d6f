# ============================================================================
# FILE: tunelist/core/youtube_client.py
# YouTube Data API v3 client used for catalog search and video details
# ============================================================================
import re
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from typing import Dict, List, Optional
from tunelist.config import settings
from tunelist.core.cache import RedisCache, cache as default_cache
import logging

logger = logging.getLogger(__name__)

ISO_DURATION = re.compile(r"^PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?$")


def format_duration(duration: Optional[str]) -> str:
    """Turn an ISO 8601 duration (PT1H2M3S) into 1:02:03 / 4:05"""
    match = ISO_DURATION.match(duration or "")
    if not match:
        return "N/A"
    hours, minutes, seconds = (int(part or 0) for part in match.groups())
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_view_count(count: int) -> str:
    if count >= 1_000_000_000:
        return f"{count / 1_000_000_000:.1f}B"
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M"
    if count >= 1_000:
        return f"{count / 1_000:.1f}K"
    return str(count)


def embed_url(video_id: str) -> str:
    return settings.YOUTUBE_EMBED_URL.format(video_id=video_id)


class YouTubeClient:
    """
    YouTube Data API v3 client for catalog search
    Implements caching to minimize API quota usage
    """

    def __init__(self, api_key: Optional[str] = None, service=None, cache: Optional[RedisCache] = None):
        """Initialize YouTube API client"""
        self.api_key = settings.YOUTUBE_API_KEY if api_key is None else api_key
        self.cache = cache or default_cache
        self.youtube = service

        if self.youtube is None and self.api_key:
            try:
                self.youtube = build(
                    settings.YOUTUBE_API_SERVICE_NAME,
                    settings.YOUTUBE_API_VERSION,
                    developerKey=self.api_key,
                )
                logger.info("YouTube API client initialized successfully")
            except Exception as e:
                logger.error(f"Failed to initialize YouTube API client: {e}")
        elif self.youtube is None:
            logger.warning("YouTube API key not configured")

    @property
    def is_available(self) -> bool:
        return self.youtube is not None

    def get_video_details(self, video_ids: List[str]) -> Optional[List[Dict]]:
        """
        Get title, duration and view count for a batch of videos

        Args:
            video_ids: YouTube video IDs

        Returns:
            List of {id, title, channelTitle, thumbnail, duration, viewCount,
            viewCountText}
            or None if error
        """
        if not self.youtube:
            logger.error("YouTube API client not initialized")
            return None
        if not video_ids:
            return []

        try:
            response = self.youtube.videos().list(
                part="snippet,contentDetails,statistics",
                id=",".join(video_ids),
            ).execute()
        except HttpError as e:
            logger.error(f"YouTube API error for videos {video_ids}: {e}")
            return None

        videos = [
            {
                "id": item["id"],
                "title": item.get("snippet", {}).get("title"),
                "channelTitle": item.get("snippet", {}).get("channelTitle"),
                "thumbnail": item.get("snippet", {}).get("thumbnails", {}).get("medium", {}).get("url"),
                "duration": format_duration(item.get("contentDetails", {}).get("duration")),
                "viewCount": int(item.get("statistics", {}).get("viewCount", 0)),
            }
            for item in response.get("items", [])
        ]
        for video in videos:
            video["viewCountText"] = format_view_count(video["viewCount"])
        return videos

    def search(self, query: str, max_results: int = 12) -> Optional[List[Dict]]:
        """
        Search videos and merge in duration/view count
        Results are cached in Redis

        Returns:
            List of video dicts shaped for playlist songs, or None if error
        """
        if not self.youtube:
            logger.error("YouTube API client not initialized")
            return None

        cache_key = f"youtube:search:{query}:{max_results}"
        cached_data = self.cache.get_cache(cache_key)
        if cached_data is not None:
            logger.info(f"Cache hit for search: {query}")
            return cached_data

        try:
            response = self.youtube.search().list(
                part="snippet",
                q=query,
                type="video",
                maxResults=max_results,
            ).execute()
        except HttpError as e:
            logger.error(f"YouTube API search error for '{query}': {e}")
            return None

        items = [item for item in response.get("items", []) if item.get("id", {}).get("videoId")]
        details = self.get_video_details([item["id"]["videoId"] for item in items]) or []
        details_by_id = {d["id"]: d for d in details}

        results = []
        for item in items:
            video_id = item["id"]["videoId"]
            snippet = item.get("snippet", {})
            thumbnails = snippet.get("thumbnails", {})
            medium = thumbnails.get("medium", {}).get("url")
            detail = details_by_id.get(video_id, {})
            results.append({
                "videoId": video_id,
                "title": snippet.get("title"),
                "description": snippet.get("description"),
                "thumbnail": medium,
                "thumbnailHigh": thumbnails.get("high", {}).get("url") or medium,
                "channelTitle": snippet.get("channelTitle"),
                "publishedAt": snippet.get("publishedAt"),
                "duration": detail.get("duration", "N/A"),
                "viewCount": detail.get("viewCount", 0),
                "viewCountText": format_view_count(detail.get("viewCount", 0)),
            })

        self.cache.set_cache(cache_key, results, settings.CACHE_EXPIRE_SECONDS)
        logger.info(f"Fetched and cached search results: {query} ({len(results)})")
        return results

    def get_video(self, video_id: str) -> Optional[Dict]:
        """Single video with its embed URL, None if unknown or on error"""
        details = self.get_video_details([video_id])
        if not details:
            return None
        video = dict(details[0])
        video["videoId"] = video.pop("id")
        video["embedUrl"] = embed_url(video_id)
        return video


# Singleton instance
youtube_client = YouTubeClient()
