from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Dict, Optional
from datetime import datetime


@dataclass
class SocialUser:
    id: str
    username: str  # @handle
    name: str      # Display Name


@dataclass
class SocialPost:
    id: str
    text: str
    user: SocialUser
    created_at: datetime
    metrics: Dict[str, int] = field(default_factory=lambda: {"likes": 0, "reposts": 0, "replies": 0})


class SocialPlatformAdapter(ABC):
    """Search + publish contract used by the trend bot.

    search() may raise on network/auth/rate-limit problems; callers pace
    their own requests. post() raises on failure and returns the new post id.
    """

    @abstractmethod
    def search(self, query: str, count: int = 10) -> List[SocialPost]:
        """Search for posts matching the query"""
        pass

    @abstractmethod
    def post(self, content: str) -> Optional[str]:
        """Create a new post. Returns ID of the new post."""
        pass
