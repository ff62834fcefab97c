"""
Content Composer
Analysis → LLM 요약 (실패 시 템플릿) + 해시태그 → 트윗 길이로 포맷
"""
import json
from typing import Dict, List, Optional

from core.llm import BaseLLMClient
from agent.trends.models import Analysis, TopicAggregate
from agent.platforms.twitter.formatter import format_for_twitter
from agent.core.logger import get_logger

logger = get_logger("composer")

MAX_HASHTAGS = 8

SUMMARY_SYSTEM_PROMPT = (
    "You are a cryptocurrency market analyst who creates engaging, informative summaries "
    "of crypto trends for Twitter. Write in English, be concise but informative, "
    "and use emojis appropriately."
)
EXPLANATION_SYSTEM_PROMPT = (
    "You are a crypto expert explaining trending topics. Write clear, educational explanations "
    "in English that help people understand what's happening in crypto markets."
)
SENTIMENT_SYSTEM_PROMPT = (
    "You are a crypto market sentiment analyst. Provide insights about market mood and what it "
    "means for traders and investors. Write in English with clear explanations."
)
EDUCATION_SYSTEM_PROMPT = (
    "You are a crypto educator. Explain complex cryptocurrency concepts in simple, "
    "easy-to-understand terms. Use analogies and examples when helpful. Write in English."
)

SENTIMENT_LABELS = {
    'bullish': '🟢 Bullish',
    'bearish': '🔴 Bearish',
    'neutral': '🟡 Neutral',
}

SENTIMENT_HASHTAGS = {
    'bullish': ['#Bullish', '#CryptoBull'],
    'bearish': ['#Bearish', '#CryptoBear'],
    'neutral': ['#Neutral', '#CryptoMarket'],
}

CATEGORY_HASHTAGS = {
    'bitcoin': ['#Bitcoin', '#BTC'],
    'ethereum': ['#Ethereum', '#ETH'],
    'defi': ['#DeFi'],
    'nft': ['#NFT', '#NFTs'],
    'web3': ['#Web3'],
}

EDUCATIONAL_FALLBACKS = {
    'bitcoin': 'Bitcoin is the first and largest cryptocurrency, often called "digital gold." '
               'It operates on a decentralized network using blockchain technology.',
    'ethereum': "Ethereum is a blockchain platform that enables smart contracts and decentralized "
                "applications (dApps). It's the foundation for DeFi and NFTs.",
    'defi': 'DeFi (Decentralized Finance) refers to financial services built on blockchain '
            'without traditional intermediaries like banks.',
    'nft': 'NFTs (Non-Fungible Tokens) are unique digital assets that represent ownership of '
           'specific items, often digital art or collectibles.',
    'web3': 'Web3 represents the next generation of the internet, built on blockchain technology '
            'with decentralized applications and user ownership.',
}


class ContentComposer:

    def __init__(self, llm: BaseLLMClient, max_length: int = 280, max_tokens: int = 500):
        self.llm = llm
        self.max_length = max_length
        self.max_tokens = max_tokens

    # ------------------------------------------------------------------
    # main post
    # ------------------------------------------------------------------

    def compose(self, analysis: Analysis) -> str:
        """요약 + 해시태그 → 최종 트윗 텍스트"""
        summary = format_for_twitter(self.generate_summary(analysis), self.max_length)
        hashtags = " ".join(self.generate_hashtags(analysis))
        return format_for_twitter(f"{summary}\n\n{hashtags}", self.max_length)

    def generate_summary(self, analysis: Analysis) -> str:
        return self._generate_or_fallback(
            prompt=self.build_summary_prompt(analysis),
            system_prompt=SUMMARY_SYSTEM_PROMPT,
            fallback=lambda: self.compose_fallback(analysis),
            temperature=0.7,
            label="summary",
        )

    def build_summary_prompt(self, analysis: Analysis) -> str:
        top_trends = "\n".join(
            f"- {t.keyword}: {t.mentions} mentions, {t.sentiment} sentiment, {t.trend_strength} strength"
            for t in analysis.top_trends[:5]
        )
        hot_topics = "\n".join(
            f"- {h.keyword} (strength: {h.strength})" for h in analysis.hot_topics
        )
        movements = "\n".join(
            f"- {m.keyword}: {m.potential_movement} ({m.sentiment})" for m in analysis.price_movements
        )
        buzz = analysis.community_buzz
        return f"""
Analyze these crypto trends and create a Twitter-friendly summary:

Market Sentiment: {analysis.market_sentiment}
Community Activity: {buzz.community_activity}
Total Mentions: {buzz.total_mentions}

Top Trends:
{top_trends}

Hot Topics:
{hot_topics}

Price Movement Indicators:
{movements}

Create a concise summary that explains what's happening in crypto markets right now. Include emojis and make it engaging for Twitter users.
""".strip()

    @staticmethod
    def compose_fallback(analysis: Analysis) -> str:
        """LLM 없이 Analysis만으로 만드는 고정 템플릿"""
        label = SENTIMENT_LABELS.get(analysis.market_sentiment, SENTIMENT_LABELS['neutral'])
        lines = ["📊 Crypto Market Update 📊", "", f"Market Sentiment: {label}", ""]

        if analysis.top_trends:
            top = analysis.top_trends[0]
            lines += [
                f"Top Trend: {top.keyword}",
                f"Mentions: {top.mentions}",
                f"Sentiment: {top.sentiment}",
                "",
            ]

        buzz = analysis.community_buzz
        lines += [
            f"Community Activity: {buzz.community_activity}",
            f"Total Mentions: {buzz.total_mentions}",
            "",
            "Stay informed about crypto trends!",
        ]
        return "\n".join(lines)

    @staticmethod
    def generate_hashtags(analysis: Analysis) -> List[str]:
        hashtags = ['#CryptoAnalysis', '#CryptoTrends']
        hashtags += SENTIMENT_HASHTAGS.get(analysis.market_sentiment, SENTIMENT_HASHTAGS['neutral'])

        for trend in analysis.top_trends[:3]:
            hashtags.append("#" + trend.keyword.replace("#", ""))

        seen_categories = []
        for trend in analysis.top_trends:
            if trend.category not in seen_categories:
                seen_categories.append(trend.category)
        for category in seen_categories:
            hashtags += CATEGORY_HASHTAGS.get(category, [])

        unique = list(dict.fromkeys(hashtags))
        return unique[:MAX_HASHTAGS]

    # ------------------------------------------------------------------
    # auxiliary generations
    # ------------------------------------------------------------------

    def explain_trend(self, trend: TopicAggregate) -> str:
        samples = "\n".join(f'- "{p.text[:100]}..."' for p in trend.posts[:3])
        prompt = f"""
Explain this crypto trend in simple terms:

Keyword: {trend.keyword}
Category: {trend.category}
Sentiment: {trend.sentiment}
Mentions: {trend.mentions}
Engagement: {trend.total_engagement}
Trend Strength: {trend.trend_strength}

Sample tweets:
{samples}

Provide a clear explanation of why this trend is happening and what it means for crypto markets. Keep it educational and accessible.
""".strip()
        return self._generate_or_fallback(
            prompt, EXPLANATION_SYSTEM_PROMPT,
            fallback=lambda: trend.explanation,
            temperature=0.6, max_tokens=200, label="explanation",
        )

    def sentiment_commentary(self, analysis: Analysis) -> str:
        breakdown: Dict[str, int] = {}
        for t in analysis.top_trends:
            breakdown[t.sentiment] = breakdown.get(t.sentiment, 0) + 1
        by_topic = "\n".join(
            f"- {t.keyword}: {t.sentiment} ({t.mentions} mentions)" for t in analysis.top_trends[:10]
        )
        buzz = analysis.community_buzz
        prompt = f"""
Analyze the current crypto market sentiment:

Overall Sentiment: {analysis.market_sentiment}
Sentiment Breakdown: {json.dumps(breakdown)}
Community Activity: {buzz.community_activity}
Total Engagement: {buzz.total_engagement}

Top trending topics by sentiment:
{by_topic}

Provide insights about what this sentiment means for crypto markets and what traders should watch for.
""".strip()

        def _fallback():
            return (
                f"Market sentiment analysis shows {analysis.market_sentiment} conditions with "
                f"{buzz.community_activity} community activity. "
                f"{len(analysis.top_trends)} trending topics detected. "
                "Monitor key indicators for trading opportunities. #CryptoAnalysis"
            )

        return self._generate_or_fallback(
            prompt, SENTIMENT_SYSTEM_PROMPT, fallback=_fallback,
            temperature=0.5, max_tokens=300, label="sentiment",
        )

    def educational_content(self, topic: str) -> str:
        prompt = f"""
Create educational content about this crypto topic: {topic}

Explain:
1. What it is
2. How it works
3. Why it matters
4. Real-world examples or analogies

Make it beginner-friendly but informative. Use simple language and avoid jargon when possible.
""".strip()

        def _fallback():
            return EDUCATIONAL_FALLBACKS.get(
                topic.lower().lstrip('#'),
                f"{topic} is an important concept in cryptocurrency and blockchain technology. "
                "Research thoroughly before investing."
            )

        return self._generate_or_fallback(
            prompt, EDUCATION_SYSTEM_PROMPT, fallback=_fallback,
            temperature=0.6, max_tokens=400, label="education",
        )

    def _generate_or_fallback(
        self,
        prompt: str,
        system_prompt: str,
        fallback,
        temperature: float,
        max_tokens: Optional[int] = None,
        label: str = "llm",
    ) -> str:
        try:
            text = self.llm.generate(
                prompt,
                system_prompt=system_prompt,
                max_tokens=max_tokens or self.max_tokens,
                temperature=temperature,
            )
        except Exception as e:
            logger.warning(f"[COMPOSE] {label} generation failed, using template: {e}")
            return fallback()
        if not text or not text.strip():
            logger.warning(f"[COMPOSE] {label} generation returned empty text, using template")
            return fallback()
        return text
