# Repositories package init
"""
Portico Backend — Repositories
================================

Query helpers sitting between services and the ORM. Each repository wraps
the request's AsyncSession; transactions are owned by get_db_session.
"""
