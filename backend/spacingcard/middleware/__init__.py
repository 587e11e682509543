# Middleware package init
"""
SpacingCard — Middleware Package
==================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: Generate correlation ID for logging and error bodies
    2. Logging: Log method, path, status and duration with the request ID
    3. GZip: Compresses JSON bodies over 1 KB
    4. CORS: Applied by FastAPI's CORSMiddleware (handles preflight)
"""
