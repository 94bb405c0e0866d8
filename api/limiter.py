"""
api/limiter.py -- Shared slowapi rate limiter instance.

Backs the per-IP limit on POST /auth/login (LOGIN_RATE_LIMIT). api/main.py
registers it on app.state next to SlowAPIMiddleware; web/routes.py applies it.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")
