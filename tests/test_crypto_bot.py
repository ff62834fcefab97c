import unittest
from unittest.mock import MagicMock
from types import SimpleNamespace
from datetime import datetime, timezone
import sys
import os

# Add project root to path
sys.path.append(os.getcwd())

from core.llm import LLMError
from agent.bot import CryptoTrendBot
from agent.trends.models import TrendPost


def make_settings(**overrides):
    values = dict(
        TWEET_RATE_LIMIT=2,
        SEARCH_KEYWORDS=["#bitcoin", "#eth"],
        SEARCH_RESULT_LIMIT=10,
        API_CALL_DELAY=0,
        ANALYSIS_TIME_WINDOW=24,
        MAX_TWEET_LENGTH=280,
        LLM_MAX_TOKENS=500,
        TRENDING_HASHTAGS_LIMIT=50,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def make_posts():
    now = datetime.now(timezone.utc)
    posts = [TrendPost("#bitcoin", f"bitcoin bullish {i}", now, likes=10 * i) for i in range(1, 4)]
    posts += [TrendPost("#eth", "eth chart", now, likes=1) for _ in range(12)]
    return posts


class TestCryptoTrendBot(unittest.TestCase):
    def setUp(self):
        self.adapter = MagicMock()
        self.adapter.post.return_value = "42"
        self.llm = MagicMock()
        self.llm.generate.side_effect = LLMError("no key")
        self.fetcher = MagicMock()
        self.fetcher.fetch.return_value = make_posts()
        self.bot = CryptoTrendBot(self.adapter, self.llm, settings=make_settings(), fetcher=self.fetcher)

    def test_report_is_none_before_first_cycle(self):
        self.assertIsNone(self.bot.get_analysis_report())
        self.assertIsNone(self.bot.get_status()["last_analysis"])

    def test_cycle_publishes_and_records_analysis(self):
        content = self.bot.run_cycle()

        self.assertIsNotNone(content)
        self.adapter.post.assert_called_once()
        self.assertLessEqual(len(self.adapter.post.call_args[0][0]), 280)
        self.assertEqual(self.bot.state.post_count, 1)

        report = self.bot.get_analysis_report()
        self.assertEqual(report["top_trends"][0]["keyword"], "#bitcoin")
        self.assertEqual(report["top_trends"][0]["total_engagement"], 60)
        self.assertEqual(report["market_sentiment"], "neutral")
        self.assertTrue(report["insights"])
        self.assertEqual(self.bot.get_status()["last_analysis"], report["timestamp"])

    def test_report_keeps_top_ten(self):
        now = datetime.now(timezone.utc)
        self.fetcher.fetch.return_value = [TrendPost(f"#k{i}", "x", now, likes=i) for i in range(15)]
        self.bot.run_cycle(publish=False)
        self.assertEqual(len(self.bot.get_analysis_report()["top_trends"]), 10)

    def test_daily_cap_blocks_scheduled_publish(self):
        self.bot.state.is_running = True

        for _ in range(3):
            self.bot.on_schedule_tick()

        self.assertEqual(self.adapter.post.call_count, 2)
        self.assertEqual(self.fetcher.fetch.call_count, 2)
        self.assertEqual(self.bot.state.post_count, 2)

        self.bot.reset_daily_counter()
        self.bot.on_schedule_tick()
        self.assertEqual(self.adapter.post.call_count, 3)

    def test_force_post_respects_cap(self):
        self.bot.state.post_count = 2

        content = self.bot.force_post()

        self.assertIsNotNone(content)
        self.adapter.post.assert_not_called()
        self.assertIsNotNone(self.bot.get_analysis_report())

    def test_stopped_bot_ignores_ticks(self):
        self.bot.start()
        self.bot.stop()
        self.fetcher.fetch.reset_mock()

        self.bot.on_schedule_tick()

        self.fetcher.fetch.assert_not_called()
        self.assertFalse(self.bot.get_status()["is_running"])

    def test_empty_fetch_is_noop(self):
        self.fetcher.fetch.return_value = []

        self.assertIsNone(self.bot.run_cycle())
        self.adapter.post.assert_not_called()
        self.assertIsNone(self.bot.get_analysis_report())

    def test_publish_failure_abandons_cycle(self):
        self.adapter.post.side_effect = RuntimeError("rate limited")

        self.assertIsNone(self.bot.run_cycle())
        self.assertEqual(self.bot.state.post_count, 0)
        # analysis from the failed cycle is still kept
        self.assertIsNotNone(self.bot.get_analysis_report())

    def test_fetch_failure_is_logged_not_raised(self):
        self.fetcher.fetch.side_effect = RuntimeError("network down")
        self.assertIsNone(self.bot.run_cycle())

    def test_dry_run_does_not_publish(self):
        content = self.bot.force_post(dry_run=True)

        self.assertTrue(content)
        self.adapter.post.assert_not_called()
        self.assertEqual(self.bot.state.post_count, 0)

    def test_status(self):
        scheduler = MagicMock()
        scheduler.get_next_post_time.return_value = "2026-01-01T06:00:00+00:00"
        self.bot.scheduler = scheduler

        status = self.bot.get_status()

        self.assertEqual(status, {
            "is_running": False,
            "post_count": 0,
            "max_posts_per_day": 2,
            "last_analysis": None,
            "next_post_time": "2026-01-01T06:00:00+00:00",
        })


if __name__ == '__main__':
    unittest.main()
