"""
Prometheus metrics definitions for the photo relay API.
All metrics are registered here and can be imported by other modules.
"""
from prometheus_client import Counter, Histogram

# HTTP request metrics
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'path', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'path'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

# Error metrics
errors_total = Counter(
    'errors_total',
    'Total errors',
    ['error_type']
)

# Photo upload metrics
photo_uploads_total = Counter(
    'photo_uploads_total',
    'Total photo upload attempts',
    ['status']  # success, missing_file, too_large, failed
)

# Storage provider metrics
storage_provider_requests_total = Counter(
    'storage_provider_requests_total',
    'Total storage provider upload requests',
    ['provider']
)

storage_provider_failures_total = Counter(
    'storage_provider_failures_total',
    'Total storage provider upload failures',
    ['provider']
)

storage_upload_duration_seconds = Histogram(
    'storage_upload_duration_seconds',
    'Storage provider upload duration in seconds',
    ['provider', 'status'],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0]
)

# Temporary file cleanup
temp_files_removed_total = Counter(
    'temp_files_removed_total',
    'Total staged upload files removed from local storage'
)
