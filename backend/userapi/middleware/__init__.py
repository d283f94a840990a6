# Middleware package init
"""
User API — Middleware Package
==============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → Route Handler

    1. Request ID: Generate correlation ID for logging and error bodies
    2. Logging: Log method, path, status and duration with that ID
"""
