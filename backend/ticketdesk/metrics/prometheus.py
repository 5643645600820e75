from prometheus_client import Counter, Histogram

api_request_latency_seconds = Histogram(
    "api_request_latency_seconds",
    "API request latency in seconds",
    ["route", "method", "status"],
)

tickets_created_total = Counter(
    "tickets_created_total",
    "Total tickets created",
    ["priority"],
)

tickets_updated_total = Counter(
    "tickets_updated_total",
    "Total ticket updates",
    ["status"],
)

tickets_deleted_total = Counter(
    "tickets_deleted_total",
    "Total ticket delete requests",
)

comments_added_total = Counter(
    "comments_added_total",
    "Total comments added to tickets",
)

logins_total = Counter(
    "logins_total",
    "Login attempts by outcome",
    ["outcome"],
)

registrations_total = Counter(
    "registrations_total",
    "Registered users by role",
    ["role"],
)
