"""Authentication service for JWT and password handling."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from rank_tracker.config import get_settings
from rank_tracker.errors import EmailInUse, InternalError, InvalidInput
from rank_tracker.models.user import User

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, as carried by an access token."""

    user_id: int
    email: str


def normalize_email(email: str) -> str:
    return email.strip().lower()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int, email: str) -> str:
    """Create a JWT access token."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "email": email,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def resolve_identity(token: str) -> Identity | None:
    """Turn a bearer token into an Identity, or None if it is not usable."""
    payload = decode_access_token(token)
    if payload is None:
        return None

    user_id = payload.get("sub")
    if user_id is None or not str(user_id).isdigit():
        return None

    return Identity(user_id=int(user_id), email=payload.get("email", ""))


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = get_user_by_email(db, email)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == normalize_email(email)).first()


def get_user_by_id(db: Session, user_id: int) -> User | None:
    """Get a user by id."""
    return db.query(User).filter(User.id == user_id).first()


def register_user(
    db: Session,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    company: str,
) -> User:
    """Create a new user account.

    The email pre-check gives a friendly error for the common case; the
    unique constraint on ``users.email`` settles concurrent signups.

    Raises:
        InvalidInput: A required field is missing or blank.
        EmailInUse: Another account already uses this email.
        InternalError: The insert failed for any other reason.
    """
    fields = {
        "email": email,
        "password": password,
        "first_name": first_name,
        "last_name": last_name,
        "company": company,
    }
    missing = {
        name: f"{name} is required"
        for name, value in fields.items()
        if not value or not value.strip()
    }
    if missing:
        raise InvalidInput(missing, "All fields are required")

    email = normalize_email(email)
    if get_user_by_email(db, email):
        raise EmailInUse()

    user = User(
        email=email,
        password_hash=get_password_hash(password),
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        company=company.strip(),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Concurrent signup rejected by unique constraint")
        raise EmailInUse() from None
    except SQLAlchemyError:
        db.rollback()
        logger.error("Database error during user creation", exc_info=True)
        raise InternalError("Failed to create user account. Please try again.") from None
    db.refresh(user)

    logger.info("User registered: id=%s", user.id)
    return user
