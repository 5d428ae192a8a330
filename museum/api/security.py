# museum/api/security.py
import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from museum.utils.settings import ADMIN_USERNAME, ADMIN_PASSWORD
from museum.utils.logging import get_logger

logger = get_logger(__name__)

basic = HTTPBasic(auto_error=False)


def _matches(given: str, expected: str) -> bool:
    return secrets.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


def require_admin(credentials: HTTPBasicCredentials | None = Depends(basic)) -> str:
    """Statyczne dane admina z konfiguracji, HTTP Basic."""
    if credentials is not None:
        user_ok = _matches(credentials.username, ADMIN_USERNAME)
        password_ok = _matches(credentials.password, ADMIN_PASSWORD)
        if user_ok and password_ok:
            return credentials.username

    logger.warning("Rejected admin request without valid credentials")
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Admin credentials required.",
        headers={"WWW-Authenticate": 'Basic realm="Vyom Admin"'},
    )
