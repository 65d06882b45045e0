"""Prometheus metrics for monitoring late-fee computations and RVG estimates"""

from prometheus_client import Counter, Histogram

from mahnung_gateway.domain.models import LateFeeResult, RvgFeeResult

# Late fee metrics
late_fee_counter = Counter(
    "mahnung_late_fee_total",
    "Late fee computations",
    ["client_type", "overdue"],  # company | private, yes | no
)

# RVG metrics
rvg_estimate_counter = Counter(
    "mahnung_rvg_estimate_total",
    "RVG fee estimates",
    ["lookup"],  # table | extrapolated
)

# Workflow rejections
invoice_rejection_counter = Counter(
    "mahnung_invoice_rejections_total",
    "Invoices refused before any fee was computed",
    ["reason"],  # too_recent | invalid_input
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_late_fee(client_type: str, result: LateFeeResult) -> None:
    """Count computations per debtor type and whether anything was owed"""
    overdue = "yes" if result.days_overdue > 0 else "no"
    late_fee_counter.labels(client_type=client_type, overdue=overdue).inc()


def record_rvg_estimate(result: RvgFeeResult) -> None:
    """Count how often claims fall beyond the tabulated schedule"""
    lookup = "extrapolated" if result.extra_units > 0 else "table"
    rvg_estimate_counter.labels(lookup=lookup).inc()


def record_rejection(reason: str) -> None:
    invoice_rejection_counter.labels(reason=reason).inc()
