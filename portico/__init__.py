"""
Portico Backend — Application Package
=======================================

Layers:

    ┌─────────────────────────────────────┐
    │  Middleware + Request Lifecycle     │  ← language/user context, envelopes, errors
    ├─────────────────────────────────────┤
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services + Security (Business)    │  ← sign-in, roles, tokens
    ├─────────────────────────────────────┤
    │   Repositories + Models (Data)      │  ← async SQLAlchemy
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
