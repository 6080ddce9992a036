"""Rate limiter shared by the application and its public routes."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from civicalert.config import get_settings

settings = get_settings()

limiter = Limiter(key_func=get_remote_address)

PUBLIC_WRITE_LIMIT = f"{settings.rate_limit_per_minute}/minute"
