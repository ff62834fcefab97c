"""
Trend analysis data model
한 사이클 동안만 유지되는 트렌드 분석 구조
"""
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import List, Optional, Dict, Any


@dataclass
class TrendPost:
    """키워드 검색으로 수집된 포스트 하나"""
    keyword: str
    text: str
    created_at: datetime
    likes: int = 0
    retweets: int = 0
    replies: int = 0
    author_id: str = ""
    post_id: str = ""

    @property
    def engagement(self) -> int:
        return self.likes + self.retweets + self.replies

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "text": self.text,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "likes": self.likes,
            "retweets": self.retweets,
            "replies": self.replies,
            "author_id": self.author_id,
            "post_id": self.post_id,
        }


@dataclass
class TopicAggregate:
    keyword: str
    mentions: int
    total_engagement: int
    avg_engagement: float
    sentiment: str = "neutral"
    category: str = "general"
    trend_strength: int = 0
    explanation: str = ""
    posts: List[TrendPost] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keyword": self.keyword,
            "mentions": self.mentions,
            "total_engagement": self.total_engagement,
            "avg_engagement": self.avg_engagement,
            "sentiment": self.sentiment,
            "category": self.category,
            "trend_strength": self.trend_strength,
            "explanation": self.explanation,
            "posts": [p.to_dict() for p in self.posts],
        }


@dataclass
class HotTopic:
    keyword: str
    strength: int
    sentiment: str
    explanation: str


@dataclass
class PriceMovement:
    keyword: str
    sentiment: str
    strength: int
    potential_movement: str  # upward | downward | sideways


@dataclass
class CommunityBuzz:
    total_mentions: int
    total_engagement: int
    avg_engagement_per_mention: float
    most_engaging_topic: Optional[str]
    community_activity: str  # high | moderate | low


@dataclass
class Analysis:
    top_trends: List[TopicAggregate]
    market_sentiment: str  # bullish | bearish | neutral
    hot_topics: List[HotTopic]
    price_movements: List[PriceMovement]
    community_buzz: CommunityBuzz
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "market_sentiment": self.market_sentiment,
            "top_trends": [t.to_dict() for t in self.top_trends],
            "hot_topics": [asdict(h) for h in self.hot_topics],
            "price_movements": [asdict(m) for m in self.price_movements],
            "community_buzz": asdict(self.community_buzz),
        }
