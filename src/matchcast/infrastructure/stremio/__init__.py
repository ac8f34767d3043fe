from .quality import classify_quality
from .stream_ranker import StreamRanker

__all__ = ["StreamRanker", "classify_quality"]
