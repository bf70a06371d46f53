import re
from datetime import datetime, timezone
from typing import List, Optional
import httpx
import redis.asyncio as redis
from loguru import logger
from redis.exceptions import RedisError
from ..config import settings
from ..schemas.catalog_schemas import Thumbnail, VideoDetails
from ..utils.video_urls import thumbnail_url

# Redis client
_redis = redis.from_url(
    settings.REDIS_URL, encoding="utf-8", decode_responses=True)
YOUTUBE_API_KEY = settings.YOUTUBE_API_KEY
BASE_URL = 'https://www.googleapis.com/youtube/v3'

DEFAULT_DURATION_SECONDS = 180
BATCH_SIZE = 50                 # API maximum ids per request
CACHE_TTL_DURATION = 3600       # 1 hour

DETAILS_PARTS = 'contentDetails,snippet,statistics'
DURATION_PATTERN = re.compile(r'PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?')


def is_configured() -> bool:
    return bool(YOUTUBE_API_KEY)


def parse_youtube_duration(duration: Optional[str]) -> int:
    """
    Convert an ISO-8601 duration such as "PT1H4M13S" into seconds.
    Anything unparseable yields the default duration.
    """
    if not duration or not isinstance(duration, str):
        return DEFAULT_DURATION_SECONDS
    match = DURATION_PATTERN.search(duration)
    if not match:
        logger.warning("Invalid YouTube duration format: {}", duration)
        return DEFAULT_DURATION_SECONDS
    hours, minutes, seconds = (int(g or 0) for g in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def fallback_video_details(video_id: str) -> VideoDetails:
    """
    Placeholder details used whenever the API cannot answer.
    """
    return VideoDetails(
        id=video_id,
        title='Video Title Unavailable',
        description='Video description unavailable - YouTube API not configured',
        duration=DEFAULT_DURATION_SECONDS,
        published_at=datetime.now(timezone.utc).isoformat(),
        channel_title='Unknown Channel',
        view_count=0,
        like_count=0,
        thumbnails={
            'default': Thumbnail(url=thumbnail_url(video_id, 'default')),
            'medium': Thumbnail(url=thumbnail_url(video_id, 'mqdefault')),
            'high': Thumbnail(url=thumbnail_url(video_id, 'hqdefault')),
        },
    )


def map_to_video(item: dict, video_id: Optional[str] = None) -> VideoDetails:
    """
    Map one `videos` API item to VideoDetails.

    :param item: Item from the `items` array of the API response.
    :param video_id: Id to report, defaults to the item's own id.
    :return: VideoDetails object.
    """
    snippet = item.get('snippet', {})
    statistics = item.get('statistics', {})
    return VideoDetails(
        id=video_id or item.get('id'),
        title=snippet.get('title', ''),
        description=snippet.get('description', ''),
        duration=parse_youtube_duration(
            item.get('contentDetails', {}).get('duration')),
        published_at=snippet.get('publishedAt', ''),
        channel_title=snippet.get('channelTitle', ''),
        view_count=int(statistics.get('viewCount') or 0),
        like_count=int(statistics.get('likeCount') or 0),
        thumbnails=snippet.get('thumbnails', {}),
    )


async def _fetch_videos(
    client: httpx.AsyncClient,
    ids: List[str],
    parts: str,
    timeout: float
) -> List[dict]:
    resp = await client.get(
        f"{BASE_URL}/videos",
        params={'id': ','.join(ids), 'part': parts, 'key': YOUTUBE_API_KEY},
        timeout=timeout,
    )
    resp.raise_for_status()
    return resp.json().get('items') or []


async def get_video_details(
    client: httpx.AsyncClient,
    video_id: str
) -> VideoDetails:
    """
    Fetch title, duration, statistics and thumbnails for one video.

    :param client: HTTP client for making API requests.
    :param video_id: YouTube video id.
    :return: VideoDetails, or the fallback bundle if the API is unavailable.
    """
    if not is_configured():
        logger.warning("YouTube API not configured. Using fallback data.")
        return fallback_video_details(video_id)

    try:
        items = await _fetch_videos(client, [video_id], DETAILS_PARTS, 10.0)
    except (httpx.HTTPError, ValueError) as e:
        logger.error("Error fetching YouTube video details: {}", e)
        return fallback_video_details(video_id)

    if not items:
        logger.warning("No video found for ID: {}", video_id)
        return fallback_video_details(video_id)
    return map_to_video(items[0], video_id)


async def get_batch_video_details(
    client: httpx.AsyncClient,
    video_ids: List[str]
) -> List[VideoDetails]:
    """
    Fetch details for many videos, BATCH_SIZE ids per request.
    If any request fails every id gets the fallback bundle.

    :param client: HTTP client for making API requests.
    :param video_ids: YouTube video ids.
    :return: List of VideoDetails for the videos the API returned.
    """
    if not video_ids:
        return []
    if not is_configured():
        return [fallback_video_details(v) for v in video_ids]

    results: List[VideoDetails] = []
    try:
        for i in range(0, len(video_ids), BATCH_SIZE):
            batch = video_ids[i:i + BATCH_SIZE]
            items = await _fetch_videos(client, batch, DETAILS_PARTS, 15.0)
            results += [map_to_video(item) for item in items]
    except (httpx.HTTPError, ValueError) as e:
        logger.error("Error fetching batch YouTube video details: {}", e)
        return [fallback_video_details(v) for v in video_ids]
    return results


async def _cache_get(key: str) -> Optional[str]:
    try:
        return await _redis.get(key)
    except RedisError as e:
        logger.warning("Duration cache read failed for {}: {}", key, e)
        return None


async def _cache_set(key: str, value: str) -> None:
    try:
        await _redis.set(key, value, ex=CACHE_TTL_DURATION)
    except RedisError as e:
        logger.warning("Duration cache write failed for {}: {}", key, e)


async def get_video_duration(
    client: httpx.AsyncClient,
    video_id: str
) -> int:
    """
    Get a video's duration in seconds, with caching.
    Only durations actually returned by the API are cached.

    :param client: HTTP client for making API requests.
    :param video_id: YouTube video id.
    :return: Duration in seconds, DEFAULT_DURATION_SECONDS on any failure.
    """
    if not video_id or not is_configured():
        return DEFAULT_DURATION_SECONDS

    key = f"duration:{video_id}"
    cached = await _cache_get(key)
    if cached:
        return int(cached)

    try:
        items = await _fetch_videos(client, [video_id], 'contentDetails', 5.0)
    except (httpx.HTTPError, ValueError) as e:
        logger.error("Error fetching YouTube video duration: {}", e)
        return DEFAULT_DURATION_SECONDS
    if not items:
        return DEFAULT_DURATION_SECONDS

    duration = parse_youtube_duration(
        items[0].get('contentDetails', {}).get('duration'))
    await _cache_set(key, str(duration))
    return duration
