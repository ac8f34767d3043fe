from .client import HttpxContentCatalogFetcher, HttpxMediaFetcher

__all__ = ["HttpxContentCatalogFetcher", "HttpxMediaFetcher"]
