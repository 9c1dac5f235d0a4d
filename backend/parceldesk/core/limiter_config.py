from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .config import LIMITER_STORAGE_URI

# Global Limiter instance to be imported by controllers
# Note: create_app() calls init_app and switches it off in test mode
# when RATE_LIMIT_ENABLED=0
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["200 per hour", "50 per minute"],
    storage_uri=LIMITER_STORAGE_URI,
    enabled=True,
)
