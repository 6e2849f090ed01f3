"""
Request throttling helpers
"""

import threading
import time
from collections import defaultdict
from typing import Optional

from app.core.config import settings

# Simple in-memory rate limiter: client ip -> request times in the last minute
rate_limiter = defaultdict(list)
_rate_lock = threading.Lock()

def rate_limit_check(client_ip: str, limit: Optional[int] = None) -> bool:
    """Simple rate limiting by IP address"""
    if limit is None:
        limit = settings.RATE_LIMIT_PER_MINUTE

    current_time = time.time()
    minute_ago = current_time - 60

    with _rate_lock:
        # Clean old requests
        rate_limiter[client_ip] = [
            req_time for req_time in rate_limiter[client_ip]
            if req_time > minute_ago
        ]

        if len(rate_limiter[client_ip]) >= limit:
            return False

        rate_limiter[client_ip].append(current_time)
        return True

def get_client_ip(request) -> str:
    """Extract client IP from request"""
    # Check for forwarded IP first (for reverse proxy setups)
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return request.client.host if request.client else "unknown"
