# Services package init
"""
Portico Backend — Services Layer
==================================

Business logic between routes (HTTP) and repositories (persistence).
Services are built per request by FastAPI dependencies and raise typed
failures from portico.exceptions; they never format responses.

Service Inventory:
    - AuthenticationService: sign-in, registration, logout
    - UserService:           current user profile
    - AccessVerifier:        role checks against the context store
"""
