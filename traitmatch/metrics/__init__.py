"""
Metrics collection package.

This package provides functionality for collecting and reporting metrics
for the HTTP layer and the matching algorithm.
"""

from traitmatch.metrics.core import (
    MetricNames,
    initialize_metrics,
    increment_counter,
    report_gauge,
    report_timing,
)
from traitmatch.metrics.middleware import (
    MetricsMiddleware,
    TimingHeaderMiddleware,
    setup_all_middleware,
)
from traitmatch.metrics.algorithm import (
    async_matching_algorithm_timer,
    report_jobs_analyzed,
    report_match_count,
    report_match_score_distribution,
)

__all__ = [
    'MetricNames',
    'initialize_metrics',
    'increment_counter',
    'report_gauge',
    'report_timing',
    'MetricsMiddleware',
    'TimingHeaderMiddleware',
    'setup_all_middleware',
    'async_matching_algorithm_timer',
    'report_jobs_analyzed',
    'report_match_count',
    'report_match_score_distribution',
]
