"""Prometheus metrics for monitoring score distributions, badge unlocks and record store health"""

from typing import Iterable
from prometheus_client import Counter, Histogram

SCORE_BUCKETS = [20, 40, 60, 80, 100]

# Evaluation metrics
evaluation_counter = Counter(
    "finscore_evaluation_total",
    "Total dashboard evaluations",
    ["source"],  # posted | record_store
)

score_histogram = Histogram(
    "finscore_score",
    "Health score distribution per formula",
    ["formula"],  # wellness | portfolio
    buckets=SCORE_BUCKETS,
)

badge_counter = Counter(
    "finscore_badge_evaluated_total",
    "Badges found unlocked during evaluation",
    ["badge"],
)

new_badge_counter = Counter(
    "finscore_badge_first_unlock_total",
    "Badges unlocked for the first time for a user",
    ["badge"],
)

# Record store metrics
record_store_failures_counter = Counter(
    "record_store_failures_total",
    "Failed record store calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_evaluation(source: str, wellness_score: int, portfolio_score: int, badges: Iterable[str]) -> None:
    """Record evaluation metrics for monitoring score distributions"""
    evaluation_counter.labels(source=source).inc()
    score_histogram.labels(formula="wellness").observe(wellness_score)
    score_histogram.labels(formula="portfolio").observe(portfolio_score)

    for badge in badges:
        badge_counter.labels(badge=badge).inc()


def record_first_unlocks(badges: Iterable[str]) -> None:
    for badge in badges:
        new_badge_counter.labels(badge=badge).inc()
