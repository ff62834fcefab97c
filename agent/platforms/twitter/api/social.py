"""
Twitter API via Twikit
트위터 API 래퍼 - 검색, 포스트
"""
import os
import asyncio
from typing import TypedDict, Optional, List
from twikit import Client

from config.settings import settings
from agent.core.logger import get_logger

logger = get_logger("twitter")

REQUEST_TIMEOUT = 15.0


def _run_async(coro):
    """Run async coroutine with proper event loop handling to avoid 'Event loop is closed' errors"""
    try:
        loop = asyncio.get_event_loop()
        if loop.is_closed():
            loop = asyncio.new_event_loop()
            asyncio.set_event_loop(loop)
    except RuntimeError:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
    return loop.run_until_complete(coro)


class TweetEngagement(TypedDict, total=False):
    favorite_count: int
    retweet_count: int
    reply_count: int


class TweetData(TypedDict, total=False):
    """검색 결과 트윗 구조"""
    id: str
    user: str
    user_id: str
    text: str
    created_at: str
    engagement: TweetEngagement


_client_instance: Optional[Client] = None
_last_cookie_mtime: float = 0.0


async def _get_twikit_client() -> Client:
    """
    Twikit 클라이언트 (Singleton + Hot Reload)
    쿠키 파일이 변경되면 클라이언트를 새로 생성합니다.
    """
    global _client_instance, _last_cookie_mtime

    cookies_file = settings.TWITTER_COOKIES_PATH

    should_reload = False
    if os.path.exists(cookies_file):
        try:
            current_mtime = os.path.getmtime(cookies_file)
            if current_mtime > _last_cookie_mtime:
                logger.info(f"[TWITTER] Cookie file changed ({_last_cookie_mtime} -> {current_mtime})")
                should_reload = True
                _last_cookie_mtime = current_mtime
        except OSError:
            pass

    if _client_instance is None or should_reload:
        client = Client('en-US')

        if os.path.exists(cookies_file):
            client.load_cookies(cookies_file)
            logger.info(f"[TWITTER] Cookies loaded ({os.path.basename(cookies_file)})")
        elif settings.TWITTER_AUTH_TOKEN and settings.TWITTER_CT0:
            client.set_cookies({
                "auth_token": settings.TWITTER_AUTH_TOKEN,
                "ct0": settings.TWITTER_CT0
            })
            logger.info("[TWITTER] Using cookies from environment")
        else:
            logger.warning("[TWITTER] No cookies configured, requests will fail")

        _client_instance = client

    return _client_instance


async def _with_timeout(func, *args, **kwargs):
    try:
        return await asyncio.wait_for(func(*args, **kwargs), timeout=REQUEST_TIMEOUT)
    except asyncio.TimeoutError:
        logger.warning(f"[TWITTER] Timeout ({REQUEST_TIMEOUT:.0f}s)")
        raise


def _extract_engagement(tweet) -> TweetEngagement:
    """twikit Tweet 객체에서 engagement 추출"""
    return {
        'favorite_count': getattr(tweet, 'favorite_count', 0) or 0,
        'retweet_count': getattr(tweet, 'retweet_count', 0) or 0,
        'reply_count': getattr(tweet, 'reply_count', 0) or 0,
    }


def _to_tweet_data(tweet) -> TweetData:
    user = getattr(tweet, 'user', None)
    return {
        "id": str(tweet.id),
        "user": user.screen_name if user else "unknown",
        "user_id": str(user.id) if user else "",
        "text": tweet.text,
        "created_at": tweet.created_at,
        "engagement": _extract_engagement(tweet)
    }


async def _search_tweets_twikit(query: str, count: int) -> List[TweetData]:
    async def _do():
        client = await _get_twikit_client()
        page = await client.search_tweet(query, 'Latest', count=min(count, 20))
        results: List[TweetData] = []
        while True:
            added = 0
            for t in page:
                if len(results) >= count:
                    break
                results.append(_to_tweet_data(t))
                added += 1
            if len(results) >= count or not added:
                return results
            page = await page.next()
    return await _with_timeout(_do)


async def _post_tweet_twikit(content: str) -> str:
    async def _do():
        client = await _get_twikit_client()
        tweet = await client.create_tweet(text=content)
        return tweet.id
    return await _with_timeout(_do)


def search_tweets(query: str, count: int = 20) -> List[TweetData]:
    """트윗 검색 / Search latest tweets. Raises on failure."""
    return _run_async(_search_tweets_twikit(query, count))


def post_tweet(content: str) -> str:
    """트윗 게시 / Post tweet. Raises on failure."""
    tweet_id = _run_async(_post_tweet_twikit(content))
    logger.info(f"[TWEET] posted {tweet_id}")
    return str(tweet_id)
