# Middleware package init
"""
Portico Backend — Middleware Package
======================================

Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [CORS] → [Request ID] → [Access Log] → [Request Lifecycle] → Route Handler

    1. CORS: answers preflight requests, decorates every response
    2. Request ID: correlation id for logs and error responses
    3. Access Log: method, path, status, duration
    4. Request Lifecycle (portico.lifecycle): language/user context
       pre-hook and the failure fallback
"""
