# jobboard/utils.py

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError, VerificationError, InvalidHash
from graphql import GraphQLError
from datetime import datetime, timedelta, timezone
from functools import wraps
import logging
import re
from email_validator import validate_email, EmailNotValidError
import pwnedpasswords

from jobboard.config import (
    ALGORITHM, SECRET_KEY, TOKEN_EXPIRATION_TIME_MINUTES, CHECK_PWNED_PASSWORDS,
)
from jobboard.errors import JobBoardError, Unauthenticated

log = logging.getLogger(__name__)


# --- JWT Token Handling ---
def generate_token(user_id: int) -> str:
    """Generates a JWT token whose subject is the user's id."""
    log.debug(f"Generating token for user ID: {user_id}")
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "exp": now + timedelta(minutes=TOKEN_EXPIRATION_TIME_MINUTES),
        "iat": now,
    }
    token = jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)
    log.info(f"Token generated successfully for user ID: {user_id}")
    return token


def decode_token(token: str) -> int:
    """Returns the user id carried by a token. Raises Unauthenticated on any problem."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        log.warning("Authentication failed: Token has expired.")
        raise Unauthenticated("Token has expired.")
    except jwt.InvalidTokenError as e:
        log.warning(f"Authentication failed: Invalid JWT token - {e}")
        raise Unauthenticated("Invalid authentication token.")
    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError):
        log.warning(f"Invalid token payload: bad 'sub' claim {subject!r}.")
        raise Unauthenticated("Invalid token payload.")


def get_authenticated_user_id(context: dict) -> int:
    """Reads the bearer token from the GraphQL request and returns the caller's user id."""
    request_object = context.get("request") if context else None
    if not request_object:
        log.warning("Authentication context missing 'request' object.")
        raise Unauthenticated("Authentication context not available.")
    auth_header = request_object.headers.get("Authorization")
    token_prefix = "Bearer "
    if not auth_header or not auth_header.startswith(token_prefix):
        log.warning("Authentication failed: Missing or invalid Authorization header format.")
        raise Unauthenticated("Authentication token is missing or invalid.")
    token = auth_header[len(token_prefix):]
    if not token:
        log.warning("Authentication failed: Token part is missing after 'Bearer '.")
        raise Unauthenticated("Authentication token is missing.")
    return decode_token(token)


# --- Password Handling ---
def hash_password(pwd: str) -> str:
    """Hashes a password using Argon2."""
    ph = PasswordHasher()
    try:
        return ph.hash(pwd)
    except Exception as e:
        log.error(f"Error hashing password: {e}", exc_info=True)
        raise ValueError("Could not hash password due to internal error.")


def verify_password(pwd_hash: str, pwd: str) -> bool:
    """Verifies a plaintext password against an Argon2 hash."""
    ph = PasswordHasher()
    try:
        return ph.verify(pwd_hash, pwd)
    except VerifyMismatchError:
        log.warning("Password verification failed: Mismatch.")
        return False
    except (VerificationError, InvalidHash) as e:
        log.error(f"Password verification error: Hash format or verification issue - {e}", exc_info=True)
        return False


# --- Password Policy ---
def is_password_strong(password: str, username: str | None = None, email: str | None = None) -> bool:
    """
    Checks if the password meets security policy requirements.
    Raises ValueError with a user-friendly message if the policy is not met.
    """
    min_length = 8
    if not password or len(password) < min_length:
        log.warning(f"Password policy violation: Too short (length {len(password) if password else 0}).")
        raise ValueError(f"Password must be at least {min_length} characters long.")

    if not re.search(r"[A-Z]", password):
        raise ValueError("Password must contain at least one uppercase letter.")
    if not re.search(r"[a-z]", password):
        raise ValueError("Password must contain at least one lowercase letter.")
    if not re.search(r"[0-9]", password):
        raise ValueError("Password must contain at least one digit.")
    if not re.search(r"[!@#$%^&*(),.?\":{}|<>]", password):
        raise ValueError("Password must contain at least one special character (e.g., !@#$%).")

    if username and username.lower() in password.lower():
        log.warning("Password policy violation: Contains username.")
        raise ValueError("Password cannot contain your username.")
    if email:
        local_part = email.split("@")[0]
        if local_part and local_part.lower() in password.lower():
            log.warning("Password policy violation: Contains email prefix.")
            raise ValueError("Password cannot contain your email address prefix.")

    if CHECK_PWNED_PASSWORDS:
        try:
            count = pwnedpasswords.check(password)
        except Exception as e:
            # Breach lookup is best effort; a network failure does not block the password
            log.error(f"Error checking pwnedpasswords (network issue?): {e}", exc_info=True)
            count = 0
        if count > 0:
            log.warning(f"Password policy violation: Found in {count} breaches.")
            raise ValueError("This password has appeared in data breaches; please choose a stronger, unique password.")

    return True


# --- Email Validation ---
def validate_user_email(email: str) -> str:
    """Validates email format using email-validator. Returns normalized email."""
    if not email:
        raise ValueError("Email address cannot be empty.")
    try:
        return validate_email(email, check_deliverability=False).normalized
    except EmailNotValidError as e:
        log.warning(f"Invalid email format detected for '{email}': {e}")
        raise ValueError(f"Invalid email address format: {str(e)}")


# --- GraphQL glue ---
def to_graphql_error(error: JobBoardError) -> GraphQLError:
    return GraphQLError(error.message, extensions={"code": error.code})


def graphql_errors(action):
    """ Decorator: turns typed errors into GraphQLErrors carrying an extensions code. """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except GraphQLError:
                raise
            except JobBoardError as e:
                log.warning(f"Failed {action}: {e.message}")
                raise to_graphql_error(e)
            except Exception as e:
                log.error(f"Error {action}: {e}", exc_info=True)
                raise GraphQLError(f"An internal server error occurred while {action}.")
        return wrapper
    return decorator


def authd_user(func):
    """ Decorator: caller must present a valid JWT. Stores the id in info.context['user_id']. """
    @wraps(func)
    def wrapper(*args, **kwargs):
        if len(args) < 2:
            log.error(f"Decorator '@authd_user' applied incorrectly to function '{func.__name__}' - missing 'info' argument?")
            raise GraphQLError("Internal server error: Authorization setup incorrect.")
        info = args[1]
        try:
            user_id = get_authenticated_user_id(info.context)
        except JobBoardError as e:
            raise to_graphql_error(e)
        info.context["user_id"] = user_id
        log.debug(f"User {user_id} authenticated for '{func.__name__}'.")
        return func(*args, **kwargs)
    return wrapper
