# Middleware package init
"""
DevConnector Backend — Middleware Package
===========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Rate Limit] → [Logging] → [CORS] → Route Handler

    1. Request ID generates the correlation ID used by logs and error bodies
    2. Rate Limit rejects abusive clients before any route work
    3. Logging records method, path, status and duration with that ID
    4. CORS is FastAPI's CORSMiddleware (handles preflight)

Authentication is not a middleware: the Auth Gate is a route dependency
(`dependencies.get_current_identity`) so public routes stay public.
"""
