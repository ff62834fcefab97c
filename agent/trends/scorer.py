"""
Trend Scorer
키워드별 집계 + 감성/카테고리 태깅 + 트렌드 강도 계산

All matching is plain lower-cased substring search against the fixed tables
below, so results are deterministic for a given input.
"""
import math
from typing import Dict, List

from agent.trends.models import TrendPost, TopicAggregate
from agent.core.logger import get_logger

logger = get_logger("scorer")

MAX_SAMPLE_POSTS = 5

CRYPTO_KEYWORDS: Dict[str, List[str]] = {
    'bitcoin': ['bitcoin', 'btc', '#bitcoin', '#btc'],
    'ethereum': ['ethereum', 'eth', '#ethereum', '#eth'],
    'defi': ['defi', 'decentralized finance', '#defi'],
    'nft': ['nft', 'non-fungible token', '#nft', '#nfts'],
    'web3': ['web3', 'web 3.0', '#web3'],
    'altcoin': ['altcoin', 'alt', 'alternative coin'],
    'trading': ['trading', 'trade', 'buy', 'sell', 'hodl'],
    'market': ['bullish', 'bearish', 'pump', 'dump', 'moon', 'crash'],
}

POSITIVE_TERMS = ['bullish', 'moon', 'pump', 'buy', 'hodl', 'diamond hands', 'to the moon']
NEGATIVE_TERMS = ['bearish', 'dump', 'sell', 'crash', 'fud', 'panic']

# category -> (positive, negative, neutral)
_EXPLANATIONS: Dict[str, tuple] = {
    'bitcoin': (
        'Bitcoin is showing bullish momentum with strong community support.',
        'Bitcoin is facing bearish pressure with negative sentiment.',
        'Bitcoin discussion is neutral with mixed market opinions.',
    ),
    'ethereum': (
        'Ethereum is gaining positive attention, possibly due to network upgrades or DeFi activity.',
        'Ethereum is experiencing negative sentiment, possibly due to gas fees or network issues.',
        'Ethereum discussion is neutral with balanced market views.',
    ),
    'defi': (
        'DeFi protocols are attracting positive attention with increased activity.',
        'DeFi sector is facing challenges with negative sentiment.',
        'DeFi discussion is neutral with mixed protocol performance.',
    ),
    'nft': (
        'NFT market is showing positive momentum with new projects gaining traction.',
        'NFT market is facing headwinds with declining interest.',
        'NFT discussion is neutral with varied project performance.',
    ),
    'trading': (
        'Trading sentiment is bullish with increased buying pressure.',
        'Trading sentiment is bearish with selling pressure.',
        'Trading discussion is neutral with mixed market signals.',
    ),
}
_DEFAULT_EXPLANATION = (
    'This crypto topic is generating positive buzz in the community.',
    'This crypto topic is facing negative sentiment.',
    'This crypto topic has neutral community sentiment.',
)


def _count_terms(text: str, terms: List[str]) -> int:
    """longest first; matched text is blanked so a nested term counts once"""
    count = 0
    for term in sorted(terms, key=len, reverse=True):
        if term in text:
            count += 1
            text = text.replace(term, " ")
    return count


def classify_post_sentiment(text: str) -> str:
    """positive / negative / neutral - 매칭된 용어 수 비교, 동률이면 neutral"""
    lowered = (text or "").lower()
    positive = _count_terms(lowered, POSITIVE_TERMS)
    negative = _count_terms(lowered, NEGATIVE_TERMS)
    if positive > negative:
        return 'positive'
    if negative > positive:
        return 'negative'
    return 'neutral'


def majority_label(labels: List[str], positive: str, negative: str, neutral: str) -> str:
    """strict majority among the three buckets, otherwise neutral"""
    pos = sum(1 for label in labels if label == 'positive')
    neg = sum(1 for label in labels if label == 'negative')
    neu = sum(1 for label in labels if label == 'neutral')
    if pos > neg and pos > neu:
        return positive
    if neg > pos and neg > neu:
        return negative
    return neutral


def analyze_sentiment(posts: List[TrendPost]) -> str:
    labels = [classify_post_sentiment(p.text) for p in posts]
    return majority_label(labels, 'positive', 'negative', 'neutral')


def categorize_keyword(keyword: str) -> str:
    lowered = keyword.lower()
    for category, substrings in CRYPTO_KEYWORDS.items():
        if any(s in lowered for s in substrings):
            return category
    return 'general'


def calculate_trend_strength(total_engagement: int, mentions: int, avg_engagement: float) -> int:
    score = (math.log(total_engagement + 1) + math.log(mentions + 1) + avg_engagement) / 3
    # half-up, not banker's rounding
    return int(math.floor(score + 0.5))


def explain_trend(aggregate: TopicAggregate) -> str:
    base = (
        f"{aggregate.keyword} is trending with {aggregate.mentions} mentions "
        f"and {aggregate.total_engagement} total engagement. "
    )
    positive, negative, neutral = _EXPLANATIONS.get(aggregate.category, _DEFAULT_EXPLANATION)
    if aggregate.sentiment == 'positive':
        return base + positive
    if aggregate.sentiment == 'negative':
        return base + negative
    return base + neutral


def build_aggregate(keyword: str, posts: List[TrendPost]) -> TopicAggregate:
    if not posts:
        raise ValueError(f"cannot aggregate '{keyword}' without posts")

    mentions = len(posts)
    total = sum(p.engagement for p in posts)
    avg = total / mentions

    aggregate = TopicAggregate(
        keyword=keyword,
        mentions=mentions,
        total_engagement=total,
        avg_engagement=avg,
        sentiment=analyze_sentiment(posts),
        category=categorize_keyword(keyword),
        trend_strength=calculate_trend_strength(total, mentions, avg),
        posts=posts[:MAX_SAMPLE_POSTS],
    )
    aggregate.explanation = explain_trend(aggregate)
    return aggregate


def aggregate_topics(posts: List[TrendPost], limit: int = 50) -> List[TopicAggregate]:
    """키워드별 그룹 → 집계 → total_engagement 내림차순 (stable) → 상위 limit개"""
    groups: Dict[str, List[TrendPost]] = {}
    for post in posts:
        groups.setdefault(post.keyword.lower(), []).append(post)

    aggregates = [build_aggregate(keyword, group) for keyword, group in groups.items()]
    aggregates.sort(key=lambda a: a.total_engagement, reverse=True)
    logger.debug(f"[SCORE] {len(posts)} posts -> {len(aggregates)} topics")
    return aggregates[:limit]
