"""
Per-IP rate limiting for the account endpoints.

Uses slowapi's in-memory limiter keyed on the client address. Limits and the
on/off switch come from settings so tests and local runs can turn it off.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import get_settings

settings = get_settings()

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

REGISTER_LIMIT = settings.register_rate_limit
LOGIN_LIMIT = settings.login_rate_limit
