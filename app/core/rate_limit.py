from slowapi import Limiter
from slowapi.util import get_remote_address

# Per-client limits for the endpoints that accept credentials or tokens
LOGIN_LIMIT = "10/minute"
REGISTER_LIMIT = "10/hour"
TOKEN_LOOKUP_LIMIT = "30/minute"

limiter = Limiter(key_func=get_remote_address)
