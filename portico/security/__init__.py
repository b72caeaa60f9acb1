# Security package init
"""
Portico Backend — Security
============================

    passwords.py     PBKDF2 password hashing
    tokens.py        JWT issue/verify + Redis-backed revocation
    dependencies.py  `require_user` guard for /secure/ routes
"""
