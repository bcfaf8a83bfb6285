from prometheus_client import CollectorRegistry, Counter

registry = CollectorRegistry()

CAPTCHA_REQUESTS = Counter(
    "vtop_captcha_requests_total", "CAPTCHA images served", registry=registry
)
LOGIN_ATTEMPTS = Counter(
    "vtop_login_attempts_total", "Login attempts by outcome", ["outcome"], registry=registry
)
ATTENDANCE_REQUESTS = Counter(
    "vtop_attendance_requests_total", "Attendance tables served", registry=registry
)
OPERATION_ERRORS = Counter(
    "vtop_operation_errors_total", "Session errors by type", ["error"], registry=registry
)
