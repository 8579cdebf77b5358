from providers.base import FeedProvider, FetchError
from providers.twitter_provider import TwitterLikesProvider

__all__ = ["FeedProvider", "FetchError", "TwitterLikesProvider"]
