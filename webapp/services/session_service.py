"""
Session Service

Account signup/login and stateless session tokens. A session is a signed JWT
carried in an HTTP-only cookie; nothing about active sessions is stored on
the server.
"""

import logging
from datetime import datetime, timedelta, timezone

import jwt
from werkzeug.security import generate_password_hash, check_password_hash

from config.database import (
    DuplicateEmailError,
    create_user,
    get_user_by_email,
    get_user_by_id,
)
from webapp.errors import AuthError, ConflictError, ValidationError

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"


class SessionService:
    """Signup, login and token handling bound to one signing secret."""

    def __init__(self, secret, cookie_days=7):
        self.secret = secret
        self.cookie_days = cookie_days

    @property
    def max_age(self):
        """Cookie lifetime in seconds."""
        return int(self.cookie_days * 24 * 60 * 60)

    def issue_token(self, user, now=None):
        """
        Sign a session token for a user.

        Args:
            user (dict): Public user fields (id, name, email)
            now (datetime, optional): Issuance time, defaults to current UTC

        Returns:
            str: Encoded token
        """
        issued = now or datetime.now(timezone.utc)
        payload = {
            "id": user["id"],
            "email": user["email"],
            "name": user["name"],
            "iat": issued,
            "exp": issued + timedelta(days=self.cookie_days),
        }
        return jwt.encode(payload, self.secret, algorithm=JWT_ALGORITHM)

    def decode_token(self, token):
        """
        Verify a session token.

        Returns:
            dict or None: The token payload, or None if missing, expired or
            tampered with
        """
        if not token:
            return None
        try:
            return jwt.decode(token, self.secret, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            logger.debug("Session token expired")
        except jwt.PyJWTError as e:
            logger.debug(f"Rejected session token: {e}")
        return None

    def signup(self, name, email, password):
        """
        Create an account and return its public fields with a session token.

        Raises:
            ValidationError: A field is missing
            ConflictError: The normalized email is already registered
        """
        name = str(name).strip() if name else ""
        email = str(email).strip() if email else ""
        if not name or not email or not password:
            raise ValidationError("Name, email and password are required.")

        if get_user_by_email(email):
            raise ConflictError("An account with this email already exists.")

        try:
            user = create_user(name, email, generate_password_hash(str(password)))
        except DuplicateEmailError:
            raise ConflictError("An account with this email already exists.")

        return user, self.issue_token(user)

    def login(self, email, password):
        """
        Check credentials and return public user fields with a session token.

        Unknown email and wrong password produce the same error.

        Raises:
            ValidationError: A field is missing
            AuthError: Invalid credentials
        """
        if not email or not password:
            raise ValidationError("Email and password are required.")

        record = get_user_by_email(email)
        if not record or not check_password_hash(record["password_hash"], str(password)):
            raise AuthError("Invalid credentials.")

        user = {"id": record["id"], "name": record["name"], "email": record["email"]}
        return user, self.issue_token(user)

    def me(self, token):
        """
        Resolve the account behind a session token.

        Raises:
            AuthError: No valid token, or the account no longer exists
        """
        payload = self.decode_token(token)
        if payload is None or not isinstance(payload.get("id"), int):
            raise AuthError("Not authenticated")

        user = get_user_by_id(payload["id"])
        if user is None:
            raise AuthError("Not authenticated")
        return user
