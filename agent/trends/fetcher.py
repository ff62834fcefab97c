"""
Topic Fetcher
키워드별 검색 → TrendPost 수집 (호출 간 고정 딜레이)
"""
import time
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from agent.platforms.interface import SocialPlatformAdapter, SocialPost
from agent.trends.models import TrendPost
from agent.core.logger import get_logger

logger = get_logger("fetcher")


class TopicFetcher:

    def __init__(
        self,
        adapter: SocialPlatformAdapter,
        keywords: List[str],
        result_limit: int = 100,
        api_call_delay_ms: int = 1000,
        window_hours: int = 24,
    ):
        self.adapter = adapter
        self.keywords = list(keywords)
        self.result_limit = result_limit
        self.api_call_delay_ms = api_call_delay_ms
        self.window_hours = window_hours

    def fetch(self, now: Optional[datetime] = None) -> List[TrendPost]:
        """모든 키워드 검색. 실패한 키워드는 로그 후 스킵"""
        now = now or datetime.now(timezone.utc)
        collected: List[TrendPost] = []

        for keyword in self.keywords:
            try:
                results = self.adapter.search(keyword, self.result_limit)
            except Exception as e:
                logger.error(f"[FETCH] Search failed for {keyword}: {e}")
                results = None

            if results:
                posts = [self._to_trend_post(keyword, p) for p in results]
                fresh = [p for p in posts if self._in_window(p, now)]
                if len(fresh) < len(posts):
                    logger.debug(f"[FETCH] {keyword}: dropped {len(posts) - len(fresh)} stale posts")
                collected.extend(fresh)
                logger.debug(f"[FETCH] {keyword}: {len(fresh)} posts")

            # rate limiting
            time.sleep(self.api_call_delay_ms / 1000.0)

        logger.info(f"[FETCH] {len(collected)} posts across {len(self.keywords)} keywords")
        return collected

    def _in_window(self, post: TrendPost, now: datetime) -> bool:
        if self.window_hours <= 0 or post.created_at is None:
            return True
        created_at = post.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return created_at >= now - timedelta(hours=self.window_hours)

    @staticmethod
    def _to_trend_post(keyword: str, post: SocialPost) -> TrendPost:
        metrics = post.metrics or {}
        return TrendPost(
            keyword=keyword,
            text=post.text or "",
            created_at=post.created_at,
            likes=metrics.get("likes", 0) or 0,
            retweets=metrics.get("reposts", 0) or 0,
            replies=metrics.get("replies", 0) or 0,
            author_id=post.user.id if post.user else "",
            post_id=post.id,
        )
