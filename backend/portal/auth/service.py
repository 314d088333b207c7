import hmac
from typing import Optional

from portal.config.settings import settings

SESSION_ADMIN_KEY = "is_admin"


class AuthService:
    """Service for checking the single admin account against configured credentials."""

    @staticmethod
    def verify_credentials(username: Optional[str], password: Optional[str]) -> bool:
        """
        Compare the submitted credentials with ADMIN_USERNAME / ADMIN_PASSWORD.

        Args:
            username (Optional[str]): Submitted username
            password (Optional[str]): Submitted password

        Returns:
            bool: True when both match
        """
        if username is None or password is None:
            return False
        username_ok = hmac.compare_digest(username.encode("utf-8"), settings.ADMIN_USERNAME.encode("utf-8"))
        password_ok = hmac.compare_digest(password.encode("utf-8"), settings.ADMIN_PASSWORD.encode("utf-8"))
        return username_ok and password_ok

    @staticmethod
    def login(session: dict) -> None:
        session[SESSION_ADMIN_KEY] = True

    @staticmethod
    def logout(session: dict) -> None:
        session.clear()

    @staticmethod
    def is_admin(session: dict) -> bool:
        return bool(session.get(SESSION_ADMIN_KEY))

auth_service = AuthService()
