# Middleware package init
"""
Tremu Backend — Middleware Package
====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Rate Limit] → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Rate Limit: reject abusive clients before any processing
    2. Request ID: correlation ID for logs and the X-Request-ID header
    3. Logging: one access-log line per request with status and duration
    4. CORS: FastAPI's CORSMiddleware for the browser client
"""
