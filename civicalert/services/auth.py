"""Staff authentication against the fixed credential table."""

import hmac
import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from civicalert.config import get_settings
from civicalert.schemas.auth import User

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

# username -> (password, user)
STAFF_ACCOUNTS: dict[str, tuple[str, User]] = {
    "admin": (
        "admin@123",
        User(id="1", username="admin", role="admin", name="System Administrator"),
    ),
    "responder": (
        "resp@123",
        User(id="2", username="responder", role="responder", name="First Responder"),
    ),
}


class InvalidCredentialsError(Exception):
    """Raised when a username/password pair or a token is rejected."""

    pass


def authenticate(username: str, password: str) -> User:
    """Return the staff user for valid credentials."""
    account = STAFF_ACCOUNTS.get(username)
    if account is None or not hmac.compare_digest(account[0], password):
        logger.warning(f"Failed login attempt for {username!r}")
        raise InvalidCredentialsError("Invalid username or password")
    return account[1].model_copy()


def create_access_token(user: User, expires_delta: timedelta | None = None) -> str:
    """Issue a signed bearer token for ``user``."""
    settings = get_settings()
    expire = datetime.now(UTC) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {"sub": user.username, "role": user.role, "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> User:
    """Resolve a bearer token back to its staff user."""
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as e:
        raise InvalidCredentialsError("Could not validate credentials") from e

    account = STAFF_ACCOUNTS.get(payload.get("sub"))
    if account is None:
        raise InvalidCredentialsError("Could not validate credentials")
    return account[1].model_copy()
