from .slowapi_limiter import limiter, create_limiter, setup_rate_limiting

__all__ = ["limiter", "create_limiter", "setup_rate_limiting"]
