import os
import yaml
from typing import List
from dotenv import load_dotenv

load_dotenv()


def _load_bot_config():
    """bot.yaml 로드"""
    config_path = os.path.join(os.path.dirname(__file__), "bot.yaml")
    if os.path.exists(config_path):
        with open(config_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    return {}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


DEFAULT_SEARCH_KEYWORDS = [
    '#bitcoin', '#btc', '#ethereum', '#eth', '#crypto', '#cryptocurrency',
    '#defi', '#nft', '#web3', '#blockchain', '#altcoin', '#trading',
    '#hodl', '#bullish', '#bearish', '#pump', '#dump', '#moon'
]


class Settings:

    def __init__(self, bot_config: dict = None):
        bot = _load_bot_config() if bot_config is None else bot_config

        # ===========================================
        # 인증 정보 (.env에서 로드)
        # ===========================================
        self.DATA_DIR = os.getenv("DATA_DIR", "data")
        self.LOG_DIR = os.getenv("LOG_DIR", "logs")

        self.TWITTER_AUTH_TOKEN = os.getenv("TWITTER_AUTH_TOKEN")
        self.TWITTER_CT0 = os.getenv("TWITTER_CT0")
        self.TWITTER_COOKIES_PATH = os.getenv(
            "TWITTER_COOKIES_PATH", os.path.join(self.DATA_DIR, "twitter_cookies.json")
        )

        # LLM 설정
        self.LLM_PROVIDER = os.getenv("LLM_PROVIDER", "openai")  # openai | gemini | anthropic
        self.LLM_MAX_TOKENS = _env_int("LLM_MAX_TOKENS", 500)

        self.OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
        self.OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

        self.GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
        self.GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

        self.ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
        self.ANTHROPIC_MODEL = os.getenv("ANTHROPIC_MODEL", "claude-sonnet-4-20250514")

        # ===========================================
        # 봇 설정 (env > bot.yaml > 기본값)
        # ===========================================
        schedule = bot.get('schedule', {})
        self.BOT_USERNAME = os.getenv("BOT_USERNAME", bot.get('username', 'crypto_trends_bot'))
        self.POSTING_SCHEDULE = os.getenv("POSTING_SCHEDULE", schedule.get('posting', '0 */6 * * *'))
        self.DAILY_RESET_SCHEDULE = os.getenv("DAILY_RESET_SCHEDULE", schedule.get('daily_reset', '0 0 * * *'))
        self.MAX_TWEET_LENGTH = _env_int("MAX_TWEET_LENGTH", 280)

        crypto = bot.get('crypto', {})
        self.TRENDING_HASHTAGS_LIMIT = _env_int("TRENDING_HASHTAGS_LIMIT", crypto.get('topic_limit', 50))
        self.ANALYSIS_TIME_WINDOW = _env_int("ANALYSIS_TIME_WINDOW", crypto.get('analysis_window_hours', 24))
        self.SEARCH_RESULT_LIMIT = _env_int("SEARCH_RESULT_LIMIT", crypto.get('search_result_limit', 100))
        self.SEARCH_KEYWORDS: List[str] = crypto.get('search_keywords') or list(DEFAULT_SEARCH_KEYWORDS)

        rate = bot.get('rate_limit', {})
        self.TWEET_RATE_LIMIT = _env_int("TWEET_RATE_LIMIT", rate.get('daily_posts', 10))
        self.API_CALL_DELAY = _env_int("API_CALL_DELAY", rate.get('api_call_delay_ms', 1000))

    def has_twitter_credentials(self) -> bool:
        if self.TWITTER_COOKIES_PATH and os.path.exists(self.TWITTER_COOKIES_PATH):
            return True
        return bool(self.TWITTER_AUTH_TOKEN and self.TWITTER_CT0)

    def validate(self) -> List[str]:
        """실행 전 필수 설정 확인. 누락된 항목 이름 목록 반환"""
        missing = []
        if not self.has_twitter_credentials():
            missing.append("TWITTER_AUTH_TOKEN/TWITTER_CT0 (or TWITTER_COOKIES_PATH)")

        provider_keys = {
            'openai': ("OPENAI_API_KEY", self.OPENAI_API_KEY),
            'gemini': ("GEMINI_API_KEY", self.GEMINI_API_KEY),
            'anthropic': ("ANTHROPIC_API_KEY", self.ANTHROPIC_API_KEY),
        }
        if self.LLM_PROVIDER not in provider_keys:
            missing.append(f"LLM_PROVIDER (unknown: {self.LLM_PROVIDER})")
        else:
            key_name, key_value = provider_keys[self.LLM_PROVIDER]
            if not key_value:
                missing.append(key_name)
        return missing


settings = Settings()
