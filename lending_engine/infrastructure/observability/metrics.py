"""Prometheus metrics for monitoring rating distribution, stage gating, and schedule generation"""

from prometheus_client import Counter, Histogram

# Scoring metrics
risk_score_counter = Counter(
    "lending_risk_score_total",
    "Total risk scores computed",
    ["rating", "enough_data"],  # A-D | true/false
)

# Lifecycle metrics
stage_transition_counter = Counter(
    "lending_stage_transition_checks_total",
    "Stage transition checks",
    ["outcome"],  # allowed | rejected
)

# Amortization metrics
amortization_schedule_counter = Counter(
    "lending_amortization_schedules_total",
    "Amortization schedules generated",
    ["format"],  # json | csv
)

amortization_term_histogram = Histogram(
    "lending_amortization_term_months",
    "Requested schedule length in months",
    buckets=[12, 24, 36, 60, 120, 180, 240, 360, 600],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_risk_score(rating: str, has_enough_data: bool) -> None:
    """Record scoring outcome for monitoring the rating mix"""
    risk_score_counter.labels(rating=rating, enough_data=str(has_enough_data).lower()).inc()


def record_transition_check(allowed: bool) -> None:
    stage_transition_counter.labels(outcome="allowed" if allowed else "rejected").inc()


def record_schedule(num_rows: int, output_format: str = "json") -> None:
    """Record schedule generation and its length"""
    amortization_schedule_counter.labels(format=output_format).inc()
    amortization_term_histogram.observe(num_rows)
