from typing import List, Optional
from datetime import datetime, timezone

from agent.platforms.interface import SocialPlatformAdapter, SocialPost, SocialUser
import agent.platforms.twitter.api.social as twitter_api


class TwitterAdapter(SocialPlatformAdapter):
    """Adapter for Twitter using agent.platforms.twitter.api.social"""

    @staticmethod
    def _parse_date(date_str: str) -> Optional[datetime]:
        if not date_str:
            return None
        try:
            # Twitter "Wed Oct 10 20:19:24 +0000 2018"
            return datetime.strptime(date_str, "%a %b %d %H:%M:%S %z %Y")
        except ValueError:
            pass
        try:
            parsed = datetime.fromisoformat(date_str.replace("Z", "+00:00"))
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    def search(self, query: str, count: int = 10) -> List[SocialPost]:
        results = twitter_api.search_tweets(query, count)
        posts = []
        for item in results:
            created_at = item.get('created_at')
            if isinstance(created_at, str):
                created_at_dt = self._parse_date(created_at) or datetime.now(timezone.utc)
            elif isinstance(created_at, datetime):
                created_at_dt = created_at
            else:
                created_at_dt = datetime.now(timezone.utc)

            user = SocialUser(
                id=item.get('user_id', ''),
                username=item['user'],
                name=item['user']
            )

            engagement = item.get('engagement', {})
            metrics = {
                "likes": engagement.get('favorite_count', 0),
                "reposts": engagement.get('retweet_count', 0),
                "replies": engagement.get('reply_count', 0)
            }

            posts.append(SocialPost(
                id=item['id'],
                text=item['text'],
                user=user,
                created_at=created_at_dt,
                metrics=metrics
            ))
        return posts

    def post(self, content: str) -> Optional[str]:
        return twitter_api.post_tweet(content)
