"""
Market Summarizer
랭킹된 토픽 → 시장 감성, 핫토픽, 가격 움직임 추정, 커뮤니티 활동도
"""
from datetime import datetime, timezone
from typing import List, Optional

from agent.trends.models import (
    Analysis, CommunityBuzz, HotTopic, PriceMovement, TopicAggregate
)
from agent.trends.scorer import majority_label

HOT_TOPIC_THRESHOLD = 50
MAX_HOT_TOPICS = 5
HIGH_ACTIVITY_MENTIONS = 1000
LOW_ACTIVITY_MENTIONS = 100

PRICE_CATEGORIES = ('trading', 'market')
PRICE_TERMS = ('price', 'pump', 'dump')

_MOVEMENTS = {'positive': 'upward', 'negative': 'downward'}


def market_sentiment(trends: List[TopicAggregate]) -> str:
    return majority_label([t.sentiment for t in trends], 'bullish', 'bearish', 'neutral')


def extract_hot_topics(trends: List[TopicAggregate]) -> List[HotTopic]:
    hot = [t for t in trends if t.trend_strength > HOT_TOPIC_THRESHOLD]
    hot.sort(key=lambda t: t.trend_strength, reverse=True)
    return [
        HotTopic(
            keyword=t.keyword,
            strength=t.trend_strength,
            sentiment=t.sentiment,
            explanation=t.explanation,
        )
        for t in hot[:MAX_HOT_TOPICS]
    ]


def identify_price_movements(trends: List[TopicAggregate]) -> List[PriceMovement]:
    movements = []
    for t in trends:
        keyword = t.keyword.lower()
        if t.category in PRICE_CATEGORIES or any(term in keyword for term in PRICE_TERMS):
            movements.append(PriceMovement(
                keyword=t.keyword,
                sentiment=t.sentiment,
                strength=t.trend_strength,
                potential_movement=_MOVEMENTS.get(t.sentiment, 'sideways'),
            ))
    return movements


def analyze_community_buzz(trends: List[TopicAggregate]) -> CommunityBuzz:
    total_mentions = sum(t.mentions for t in trends)
    if total_mentions == 0:
        raise ValueError("community buzz needs at least one mention")
    total_engagement = sum(t.total_engagement for t in trends)

    most_engaging: Optional[TopicAggregate] = None
    for t in trends:
        if most_engaging is None or t.avg_engagement > most_engaging.avg_engagement:
            most_engaging = t

    if total_mentions > HIGH_ACTIVITY_MENTIONS:
        activity = 'high'
    elif total_mentions < LOW_ACTIVITY_MENTIONS:
        activity = 'low'
    else:
        activity = 'moderate'

    return CommunityBuzz(
        total_mentions=total_mentions,
        total_engagement=total_engagement,
        avg_engagement_per_mention=total_engagement / total_mentions,
        most_engaging_topic=most_engaging.keyword if most_engaging else None,
        community_activity=activity,
    )


def analyze(trends: List[TopicAggregate], timestamp: Optional[str] = None) -> Analysis:
    """랭킹된 토픽 목록 → Analysis (빈 목록이면 ValueError)"""
    if not trends:
        raise ValueError("no trends to analyze")
    return Analysis(
        top_trends=list(trends),
        market_sentiment=market_sentiment(trends),
        hot_topics=extract_hot_topics(trends),
        price_movements=identify_price_movements(trends),
        community_buzz=analyze_community_buzz(trends),
        timestamp=timestamp or datetime.now(timezone.utc).isoformat(),
    )


def summary_insights(analysis: Analysis) -> List[str]:
    insights = [f"Market sentiment is {analysis.market_sentiment} based on trending topics analysis."]

    if analysis.hot_topics:
        top = analysis.hot_topics[0]
        insights.append(f"{top.keyword} is the hottest topic with {top.strength} trend strength.")

    if analysis.price_movements:
        bullish = sum(1 for m in analysis.price_movements if m.sentiment == 'positive')
        bearish = sum(1 for m in analysis.price_movements if m.sentiment == 'negative')
        if bullish > bearish:
            insights.append('Price movement indicators suggest upward momentum.')
        elif bearish > bullish:
            insights.append('Price movement indicators suggest downward pressure.')

    buzz = analysis.community_buzz
    insights.append(
        f"Community activity is {buzz.community_activity} with {buzz.total_mentions} total mentions."
    )
    return insights
