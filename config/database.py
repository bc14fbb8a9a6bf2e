"""
Database Configuration and Management (SQLAlchemy)

Handles database setup, connections, and the user account queries used by
the session service.
"""

import logging
from pathlib import Path

from sqlalchemy import create_engine, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config.models import Base, User
from config.settings import DEFAULT_DATABASE_URL

logger = logging.getLogger(__name__)

engine = None
SessionLocal = None


class DuplicateEmailError(Exception):
    """Raised when an account with the same normalized email already exists."""


def normalize_email(email):
    return str(email).strip().lower()


def configure_database(database_url=DEFAULT_DATABASE_URL):
    """
    Bind the module engine and session factory to a database URL.

    In-memory SQLite shares a single connection so every session sees the
    same tables.

    Args:
        database_url (str): SQLAlchemy database URL

    Returns:
        sqlalchemy.engine.Engine: The configured engine
    """
    global engine, SessionLocal

    if engine is not None:
        engine.dispose()

    kwargs = {}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        else:
            db_file = database_url.split("sqlite:///", 1)[-1]
            Path(db_file).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(database_url, echo=False, **kwargs)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return engine


def get_db_session():
    """
    Get a new database session.

    Returns:
        sqlalchemy.orm.Session: Database session
    """
    if SessionLocal is None:
        configure_database()
    return SessionLocal()


def init_database():
    """
    Initialize the database with all required tables.
    """
    if engine is None:
        configure_database()
    logger.info("Initializing database...")
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database initialized successfully!")
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        raise


def create_user(name, email, password_hash):
    """
    Create a new user account.

    The email is normalized before insert; the unique constraint on
    ``users.email`` decides between concurrent inserts of the same address.

    Args:
        name (str): Display name
        email (str): Email address
        password_hash (str): Salted password hash

    Returns:
        dict: Public user fields (id, name, email)

    Raises:
        DuplicateEmailError: If the normalized email is already registered
    """
    session = get_db_session()
    try:
        user = User(
            name=name.strip(),
            email=normalize_email(email),
            password_hash=password_hash
        )
        session.add(user)
        session.commit()
        logger.info(f"Created user: {user.email} (ID: {user.id})")
        return user.to_public_dict()
    except IntegrityError:
        session.rollback()
        logger.warning(f"User with email {normalize_email(email)} already exists")
        raise DuplicateEmailError(normalize_email(email))
    except Exception as e:
        logger.error(f"Error creating user: {e}")
        session.rollback()
        raise
    finally:
        session.close()


def get_user_by_email(email):
    """
    Get a user by normalized email, including the password hash.
    """
    session = get_db_session()
    try:
        user = session.execute(
            select(User).where(User.email == normalize_email(email))
        ).scalar_one_or_none()

        if user:
            record = user.to_public_dict()
            record['password_hash'] = user.password_hash
            return record
        return None
    finally:
        session.close()


def get_user_by_id(user_id):
    """
    Get the public fields of a user by ID.
    """
    session = get_db_session()
    try:
        user = session.get(User, user_id)
        return user.to_public_dict() if user else None
    finally:
        session.close()
