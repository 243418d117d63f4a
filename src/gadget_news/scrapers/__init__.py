"""Feed download, article page fetch and representative image lookup."""

from gadget_news.scrapers.errors import FeedFetchError, PageFetchError, ScraperError

__all__ = ["FeedFetchError", "PageFetchError", "ScraperError"]
