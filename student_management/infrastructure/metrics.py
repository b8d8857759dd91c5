from prometheus_client import Counter, Histogram, generate_latest
from fastapi import Response

# Метрики для HTTP запросов
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

# Метрики для БД
db_queries_total = Counter('db_queries_total', 'Total database queries', ['entity', 'operation'])
store_errors_total = Counter('store_errors_total', 'Failed store operations', ['entity', 'kind'])

def metrics_endpoint():
    """Endpoint для Prometheus метрик"""
    return Response(content=generate_latest(), media_type="text/plain")
