"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. create_app() turns it off when
RATE_LIMIT_ENABLED is false.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Per client address; search and suggest share one budget each.
SEARCH_LIMIT = "60/minute"
SUGGEST_LIMIT = "60/minute"

limit_search = limiter.limit(SEARCH_LIMIT)
limit_suggest = limiter.limit(SUGGEST_LIMIT)
