# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Gauge, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "rota_requests_total",
    "Total HTTP requests to rota service",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "rota_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "rota_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
ASSIGNMENTS_CREATED = Counter(
    "rota_assignments_created_total",
    "Total assignments created",
    ["source"],
)
SKIPPED_DAYS = Counter(
    "rota_skipped_days_total",
    "Weekdays that could not be covered by auto-assignment",
)
AUTO_ASSIGN_RUNS = Counter(
    "rota_auto_assign_runs_total",
    "Auto-assign invocations by outcome",
    ["outcome"],
)
CONFLICT_CHECKS = Counter(
    "rota_conflict_checks_total",
    "Holiday conflict checks by result",
    ["result"],
)
PLANNER_DURATION = Histogram(
    "rota_planner_duration_seconds",
    "Time spent planning a period (excluding persistence)",
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)
NOTIFICATIONS_SENT = Counter(
    "rota_notifications_sent_total",
    "Assignment notifications sent",
    ["channel"],
)
TEAM_MEMBERS = Gauge(
    "rota_team_members",
    "Number of team members per region",
    ["region"],
)
HOLIDAYS_RECORDED = Gauge(
    "rota_holidays_recorded",
    "Number of holiday records currently stored",
)
