import unittest
import sys
import os

# Add project root to path
sys.path.append(os.getcwd())

from agent.trends.models import TopicAggregate
from agent.trends import summarizer


def make_trend(keyword, sentiment="neutral", category="general", strength=0,
               mentions=10, total=100):
    return TopicAggregate(
        keyword=keyword,
        mentions=mentions,
        total_engagement=total,
        avg_engagement=total / mentions if mentions else 0,
        sentiment=sentiment,
        category=category,
        trend_strength=strength,
        explanation=f"{keyword} explanation",
    )


class TestMarketSummarizer(unittest.TestCase):

    def test_market_sentiment_majority(self):
        bullish = [make_trend("a", "positive"), make_trend("b", "positive"), make_trend("c", "negative")]
        self.assertEqual(summarizer.market_sentiment(bullish), "bullish")

        bearish = [make_trend("a", "negative"), make_trend("b", "negative"), make_trend("c", "neutral")]
        self.assertEqual(summarizer.market_sentiment(bearish), "bearish")

        tied = [make_trend("a", "positive"), make_trend("b", "negative")]
        self.assertEqual(summarizer.market_sentiment(tied), "neutral")

    def test_hot_topics_threshold_and_order(self):
        strengths = {"s51": 51, "s50": 50, "s80": 80, "s60": 60, "s70": 70, "s90": 90, "s55": 55}
        trends = [make_trend(k, strength=v) for k, v in strengths.items()]

        hot = summarizer.extract_hot_topics(trends)

        self.assertEqual([h.keyword for h in hot], ["s90", "s80", "s70", "s60", "s55"])
        self.assertEqual(hot[0].explanation, "s90 explanation")

    def test_price_movements(self):
        trends = [
            make_trend("#trading", "positive", category="trading"),
            make_trend("#bearish", "negative", category="market"),
            make_trend("#btcprice", "neutral", category="bitcoin"),
            make_trend("#defi", "positive", category="defi"),
        ]
        movements = {m.keyword: m.potential_movement for m in summarizer.identify_price_movements(trends)}

        self.assertEqual(movements, {
            "#trading": "upward",
            "#bearish": "downward",
            "#btcprice": "sideways",
        })

    def test_community_buzz_activity_levels(self):
        high = summarizer.analyze_community_buzz([make_trend("a", mentions=600), make_trend("b", mentions=500)])
        self.assertEqual(high.community_activity, "high")

        low = summarizer.analyze_community_buzz([make_trend("a", mentions=50)])
        self.assertEqual(low.community_activity, "low")

        moderate = summarizer.analyze_community_buzz([make_trend("a", mentions=100)])
        self.assertEqual(moderate.community_activity, "moderate")

    def test_community_buzz_totals(self):
        trends = [
            make_trend("a", mentions=10, total=100),   # avg 10
            make_trend("b", mentions=5, total=150),    # avg 30
            make_trend("c", mentions=3, total=90),     # avg 30, loses tie to b
        ]
        buzz = summarizer.analyze_community_buzz(trends)

        self.assertEqual(buzz.total_mentions, 18)
        self.assertEqual(buzz.total_engagement, 340)
        self.assertAlmostEqual(buzz.avg_engagement_per_mention, 340 / 18)
        self.assertEqual(buzz.most_engaging_topic, "b")

    def test_zero_mentions_rejected(self):
        with self.assertRaises(ValueError):
            summarizer.analyze_community_buzz([])
        with self.assertRaises(ValueError):
            summarizer.analyze([])

    def test_analyze_and_insights(self):
        trends = [
            make_trend("#pump", "positive", category="market", strength=70, mentions=800, total=5000),
            make_trend("#bitcoin", "positive", category="bitcoin", strength=20, mentions=300, total=900),
        ]
        analysis = summarizer.analyze(trends, timestamp="2026-01-01T00:00:00+00:00")

        self.assertEqual(analysis.market_sentiment, "bullish")
        self.assertEqual(analysis.timestamp, "2026-01-01T00:00:00+00:00")
        self.assertEqual([h.keyword for h in analysis.hot_topics], ["#pump"])

        insights = summarizer.summary_insights(analysis)
        self.assertEqual(insights[0], "Market sentiment is bullish based on trending topics analysis.")
        self.assertIn("#pump is the hottest topic with 70 trend strength.", insights)
        self.assertIn("Price movement indicators suggest upward momentum.", insights)
        self.assertEqual(insights[-1], "Community activity is high with 1100 total mentions.")

        report = analysis.to_dict()
        self.assertEqual(report["community_buzz"]["community_activity"], "high")
        self.assertEqual(report["top_trends"][0]["keyword"], "#pump")


if __name__ == '__main__':
    unittest.main()
