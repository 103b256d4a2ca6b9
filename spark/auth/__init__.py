from .identity import AuthenticationError, AuthUser, IdentityProvider

__all__ = ["AuthenticationError", "AuthUser", "IdentityProvider"]
