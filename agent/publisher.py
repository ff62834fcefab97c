"""
Publisher
최종 텍스트 게시 + 일일 포스트 카운트
"""
from agent.platforms.interface import SocialPlatformAdapter
from agent.platforms.twitter.formatter import truncate_to_twitter_limit
from agent.core.logger import get_logger

logger = get_logger("publisher")


class PublishError(Exception):
    """Posting API rejected the post (auth, rate limit, validation, network)"""


class Publisher:

    def __init__(self, adapter: SocialPlatformAdapter, state, max_length: int = 280):
        self.adapter = adapter
        self.state = state
        self.max_length = max_length

    def publish(self, text: str) -> str:
        """게시 성공 시 post id 반환 + state.post_count 증가. 실패는 PublishError"""
        if len(text) > self.max_length:
            logger.debug(f"[POST] truncating {len(text)} -> {self.max_length} chars")
            text = truncate_to_twitter_limit(text, self.max_length)

        try:
            post_id = self.adapter.post(text)
        except Exception as e:
            raise PublishError(f"post failed: {e}") from e
        if not post_id:
            raise PublishError("post returned no id")

        self.state.post_count += 1
        logger.info(f"[POST] published {post_id}")
        return post_id
