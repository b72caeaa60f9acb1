# Routes package init
"""
Portico Backend — API Routes Package
======================================

Route Inventory:
    - health.py:  GET  /api/health
    - auth.py:    POST /api/auth/register
                  POST /api/auth/token
                  POST /api/auth/secure/logout
    - user.py:    GET  /api/user/secure/info
    - roles.py:   GET  /api/test/secure/admin

Every router uses LifecycleRoute, so handlers return plain values and the
client always receives an Envelope. Routes stay thin: business rules live
in services, and failures are raised, never formatted here.
"""
