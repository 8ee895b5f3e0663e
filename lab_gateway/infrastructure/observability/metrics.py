"""Prometheus metrics for analytics usage, logins and upstream failures"""

from prometheus_client import Counter, Histogram

from lab_gateway.domain.models import Summary

# Analytics metrics
report_counter = Counter(
    "lab_analytics_reports_total",
    "Analytics reports served",
    ["source", "has_data"],  # store | posted
)

report_transactions_histogram = Histogram(
    "lab_analytics_report_transactions",
    "Transactions aggregated per report",
    buckets=[0, 10, 50, 100, 500, 1000, 5000],
)

# Login metrics
login_counter = Counter(
    "lab_login_total",
    "Login attempts",
    ["outcome"],  # success | rejected | unavailable
)

# Upstream metrics
transaction_fetch_failures_counter = Counter(
    "lab_transaction_fetch_failures_total",
    "Failed transaction store calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_report(source: str, summary: Summary) -> None:
    """Record report metrics"""
    report_counter.labels(source=source, has_data=str(summary.has_data).lower()).inc()
    report_transactions_histogram.observe(summary.total_transactions)


def record_login(outcome: str) -> None:
    login_counter.labels(outcome=outcome).inc()
