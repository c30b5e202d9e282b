"""Password hashing and the signed identity stored in the session cookie."""
import hashlib
import logging
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import bcrypt
from jose import JWTError, jwt

from jobboard.config import settings

logger = logging.getLogger(__name__)

SESSION_TOKEN_TYPE = "session"


def _password_digest(password: str) -> bytes:
    # bcrypt ignores input past 72 bytes
    return hashlib.sha256(password.encode()).digest()


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_password_digest(password), bcrypt.gensalt()).decode()


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_password_digest(plain), hashed.encode())
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


def issue_session_token(user_id: str, now: datetime | None = None) -> str:
    """Sign the user's id for the session. Expires with the session cookie."""
    issued_at = now or datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "typ": SESSION_TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + timedelta(seconds=settings.session_max_age_seconds),
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def read_session_token(token: str) -> str | None:
    """Return the user id in a session token, or None if it can't be trusted."""
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        logger.debug("Rejected session token: %s", e)
        return None
    if claims.get("typ") != SESSION_TOKEN_TYPE:
        return None
    return claims.get("sub")


def generate_id() -> str:
    return str(uuid4())
