from .service import AdminAuthService

__all__ = ["AdminAuthService"]
