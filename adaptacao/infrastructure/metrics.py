from prometheus_client import Counter, Histogram, generate_latest
from fastapi import Response

# HTTP
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint']
)

# key-value store
kv_operations_total = Counter(
    'kv_operations_total',
    'Total key-value store operations',
    ['driver', 'operation']
)
kv_errors_total = Counter('kv_errors_total', 'Total failed key-value store operations', ['driver'])

def metrics_endpoint():
    """Prometheus metrics endpoint"""
    return Response(content=generate_latest(), media_type="text/plain")
