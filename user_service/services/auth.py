"""Authentication service: temporary email/password accounts and JWT tokens.

Production sign-in happens through an external OAuth provider; this module
only covers test accounts. Password hashes live in a CredentialStore, not in
the users table.
"""

from __future__ import annotations

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt as _bcrypt
from jose import JWTError, jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from user_service.config import get_settings
from user_service.models.user import User
from user_service.models.user_profile import UserProfile
from user_service.services.errors import EmailAlreadyExistsError, PasswordTooLongError
from user_service.store import user_profiles, users

logger = logging.getLogger(__name__)

# JWT configuration
ALGORITHM = "HS256"

LOCAL_PROVIDER = "local"

# bcrypt only hashes the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72


# ── Credential store ────────────────────────────────────────────────


class CredentialStore(ABC):
    """Email -> (user_id, password hash) mapping for temporary accounts."""

    @abstractmethod
    def get(self, email: str) -> Optional[tuple[uuid.UUID, str]]: ...

    @abstractmethod
    def add(self, email: str, user_id: uuid.UUID, password_hash: str) -> bool:
        """Store credentials. Returns False if the email is already taken."""

    @abstractmethod
    def clear(self) -> None: ...


class InMemoryCredentialStore(CredentialStore):
    """Process-local store. Contents are lost on restart."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[str, tuple[uuid.UUID, str]] = {}

    def get(self, email: str) -> Optional[tuple[uuid.UUID, str]]:
        with self._lock:
            return self._entries.get(email.lower())

    def add(self, email: str, user_id: uuid.UUID, password_hash: str) -> bool:
        key = email.lower()
        with self._lock:
            if key in self._entries:
                return False
            self._entries[key] = (user_id, password_hash)
            return True

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def hash_password(password: str) -> str:
    return _bcrypt.hashpw(password.encode("utf-8"), _bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    return _bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


# ── Accounts ────────────────────────────────────────────────────────


def signup(
    db: Session, store: CredentialStore, email: str, password: str, name: str
) -> User:
    """Create a local User + UserProfile and remember the password hash."""
    email = email.strip()
    logger.info("Signing up temporary account: email=%s", email)

    if users.exists_by_email(db, email) or store.get(email) is not None:
        logger.warning("Signup rejected, email already exists: %s", email)
        raise EmailAlreadyExistsError()

    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        logger.warning("Signup rejected, password too long: email=%s", email)
        raise PasswordTooLongError()
    password_hash = hash_password(password)

    user = User(user_id=uuid.uuid4(), email=email, provider=LOCAL_PROVIDER, is_active=True)
    users.save(db, user)
    db.flush()
    user_profiles.save(db, UserProfile(user_id=user.user_id, name=name, email=email))
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Signup rejected, email already exists: %s", email)
        raise EmailAlreadyExistsError() from exc
    db.refresh(user)

    if not store.add(email, user.user_id, password_hash):
        # user row is committed; a concurrent signup already holds the credentials
        logger.warning("Credentials already stored for email: %s", email)
        raise EmailAlreadyExistsError()
    logger.info("Temporary account created: user_id=%s", user.user_id)
    return user


def authenticate_user(
    db: Session, store: CredentialStore, email: str, password: str
) -> Optional[User]:
    """Validate credentials and return the active user, or None if invalid."""
    entry = store.get(email.strip())
    if entry is None:
        return None
    user_id, password_hash = entry
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return None
    if not verify_password(password, password_hash):
        return None
    return users.find_active_by_id(db, user_id)


# ── Tokens ──────────────────────────────────────────────────────────


def create_access_token(user_id: uuid.UUID, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed JWT access token whose subject is the user id."""
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(hours=settings.access_token_expire_hours)
    )
    to_encode = {"sub": str(user_id), "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Decode and validate a JWT token. Returns payload or None."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return None


def get_user_from_token(db: Session, token: str) -> Optional[User]:
    """Extract the active user from a JWT token. None if invalid or user gone."""
    payload = decode_access_token(token)
    if payload is None:
        return None
    subject: Optional[str] = payload.get("sub")
    if subject is None:
        return None
    try:
        user_id = uuid.UUID(subject)
    except ValueError:
        return None
    return users.find_active_by_id(db, user_id)
