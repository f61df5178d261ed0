"""Infrastructure layer: cross-cutting concerns for the elevator state service.

Modules:
    metrics     Prometheus metrics registry for store calls.
"""
