"""
Matching algorithm metrics: call duration, result counts and score spread.
"""

from typing import Callable, Dict, List

from traitmatch.core.config import settings
from traitmatch.metrics.core import (
    MetricNames,
    Tags,
    async_timer,
    report_gauge,
    report_statistical_metrics,
)

BUCKET_COUNT = 10


def async_matching_algorithm_timer(algorithm_name: str) -> Callable:
    """Time a matching coroutine under ALGORITHM_MATCHING_DURATION, tagged with the algorithm."""
    return async_timer(MetricNames.ALGORITHM_MATCHING_DURATION, {"algorithm": algorithm_name})


def _bucket_label(index: int) -> str:
    return f"{index / BUCKET_COUNT:.1f}-{(index + 1) / BUCKET_COUNT:.1f}"


def score_buckets(scores: List[float]) -> Dict[str, int]:
    """Histogram of scores in tenths; 1.0 is counted in the top bucket."""
    counts = [0] * BUCKET_COUNT
    for score in scores:
        counts[min(int(score * BUCKET_COUNT), BUCKET_COUNT - 1)] += 1
    return {_bucket_label(i): count for i, count in enumerate(counts)}


def report_match_score_distribution(scores: List[float], tags: Tags = None) -> None:
    if not settings.metrics_enabled or not scores:
        return

    report_statistical_metrics(MetricNames.ALGORITHM_MATCH_SCORE, scores, tags)
    for bucket, count in score_buckets(scores).items():
        report_gauge(f"{MetricNames.ALGORITHM_MATCH_SCORE}.bucket", count, {**(tags or {}), "bucket": bucket})


def report_match_count(count: int, tags: Tags = None) -> None:
    if settings.metrics_enabled:
        report_gauge(MetricNames.ALGORITHM_MATCH_COUNT, count, tags)


def report_jobs_analyzed(count: int, tags: Tags = None) -> None:
    if settings.metrics_enabled:
        report_gauge(MetricNames.ALGORITHM_JOBS_ANALYZED, count, tags)
