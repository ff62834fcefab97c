"""
CryptoTrendBot - Main Workflow Orchestration
Fetch → Score → Summarize → Compose → Publish
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from config.settings import settings as default_settings
from core.llm import BaseLLMClient
from agent.platforms.interface import SocialPlatformAdapter
from agent.trends.fetcher import TopicFetcher
from agent.trends.models import Analysis
from agent.trends import scorer, summarizer
from agent.content.composer import ContentComposer
from agent.publisher import Publisher
from agent.core.logger import get_logger

logger = get_logger("bot")

REPORT_TOP_TRENDS = 10


@dataclass
class BotState:
    is_running: bool = False
    post_count: int = 0
    last_analysis_at: Optional[str] = None


class CryptoTrendBot:
    def __init__(
        self,
        adapter: SocialPlatformAdapter,
        llm: BaseLLMClient,
        settings=None,
        fetcher: Optional[TopicFetcher] = None,
        composer: Optional[ContentComposer] = None,
    ):
        self.settings = settings or default_settings
        self.state = BotState()
        self.max_posts_per_day = self.settings.TWEET_RATE_LIMIT
        self.last_analysis: Optional[Analysis] = None
        self.scheduler = None

        self.fetcher = fetcher or TopicFetcher(
            adapter,
            keywords=self.settings.SEARCH_KEYWORDS,
            result_limit=self.settings.SEARCH_RESULT_LIMIT,
            api_call_delay_ms=self.settings.API_CALL_DELAY,
            window_hours=self.settings.ANALYSIS_TIME_WINDOW,
        )
        self.composer = composer or ContentComposer(
            llm,
            max_length=self.settings.MAX_TWEET_LENGTH,
            max_tokens=self.settings.LLM_MAX_TOKENS,
        )
        self.publisher = Publisher(adapter, self.state, max_length=self.settings.MAX_TWEET_LENGTH)

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------

    def start(self):
        logger.info("[BOT] Starting crypto trend bot")
        self.state.is_running = True
        self.run_cycle()

    def stop(self):
        logger.info("[BOT] Stopping crypto trend bot")
        self.state.is_running = False

    def can_post(self) -> bool:
        return self.state.post_count < self.max_posts_per_day

    def on_schedule_tick(self):
        """스케줄러 콜백 - 실행 중이고 일일 한도 미만일 때만 사이클 실행"""
        if not self.state.is_running:
            logger.debug("[CYCLE] Tick ignored, bot stopped")
            return
        if not self.can_post():
            logger.info(f"[CYCLE] Daily cap reached ({self.state.post_count}/{self.max_posts_per_day}), skipping")
            return
        logger.info("[CYCLE] Scheduled post triggered")
        self.run_cycle()

    def reset_daily_counter(self):
        self.state.post_count = 0
        logger.info("[BOT] Daily post counter reset")

    # ------------------------------------------------------------------
    # cycle
    # ------------------------------------------------------------------

    def run_cycle(self, publish: bool = True) -> Optional[str]:
        """
        One full pass. Returns the composed text, or None when the cycle
        was a no-op or failed. Errors are logged, never raised.
        """
        try:
            logger.info("[CYCLE] Analyzing crypto trends...")
            posts = self.fetcher.fetch()
            if not posts:
                logger.warning("[CYCLE] No posts fetched, skipping cycle")
                return None

            trends = scorer.aggregate_topics(posts, limit=self.settings.TRENDING_HASHTAGS_LIMIT)
            if not trends:
                logger.warning("[CYCLE] No trending topics found, skipping cycle")
                return None

            analysis = summarizer.analyze(trends)
            self.last_analysis = analysis
            self.state.last_analysis_at = analysis.timestamp
            logger.info(
                f"[CYCLE] {len(trends)} topics, sentiment={analysis.market_sentiment}, "
                f"top={trends[0].keyword}"
            )

            content = self.composer.compose(analysis)
            if not publish:
                logger.info("[CYCLE] Dry run, not publishing")
                return content

            if not self.can_post():
                logger.warning(
                    f"[CYCLE] Daily cap reached ({self.state.post_count}/{self.max_posts_per_day}), not publishing"
                )
                return content

            self.publisher.publish(content)
            logger.info(f"[CYCLE] Posted ({self.state.post_count}/{self.max_posts_per_day} today)")
            logger.debug(f"[CYCLE] Content: {content[:100]}...")
            return content

        except Exception as e:
            logger.error(f"[CYCLE] Error in analysis and post: {e}", exc_info=True)
            return None

    def force_post(self, dry_run: bool = False) -> Optional[str]:
        logger.info("[CYCLE] Manual post triggered")
        return self.run_cycle(publish=not dry_run)

    # ------------------------------------------------------------------
    # accessors
    # ------------------------------------------------------------------

    def get_status(self) -> Dict[str, Any]:
        next_post = self.scheduler.get_next_post_time() if self.scheduler else None
        return {
            "is_running": self.state.is_running,
            "post_count": self.state.post_count,
            "max_posts_per_day": self.max_posts_per_day,
            "last_analysis": self.state.last_analysis_at,
            "next_post_time": next_post,
        }

    def get_analysis_report(self) -> Optional[Dict[str, Any]]:
        if self.last_analysis is None:
            return None

        report = self.last_analysis.to_dict()
        report["top_trends"] = report["top_trends"][:REPORT_TOP_TRENDS]
        report["insights"] = summarizer.summary_insights(self.last_analysis)
        return report
