import logging
from typing import Optional

from passlib.context import CryptContext

logger = logging.getLogger(__name__)


class AdminAuthService:
    """Checks the administrator password guarding admin-only operations"""

    def __init__(self, admin_password: str):
        self.pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
        self._password_hash = self.pwd_context.hash(admin_password)

    def verify(self, password: Optional[str]) -> bool:
        if not password:
            return False
        if not self.pwd_context.verify(password, self._password_hash):
            logger.warning("Rejected admin password")
            return False
        return True
