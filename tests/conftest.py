"""
Test configuration for the AVASOFT accounts API.
"""
import os

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("EMAIL_USER", "avasoft@example.com")
os.environ.setdefault("EMAIL_PASS", "app-password")
os.environ.setdefault("MAIL_SUPPRESS_SEND", "true")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.auth.models import User, UserRole
from src.core.mail import MailDeliveryError, get_mailer
from src.core.security import hash_password
from src.database import Base, get_db
from src.main import app
from src.patients.models import Patient
from src.professionals.models import Professional

# Test database URL
TEST_DATABASE_URL = "sqlite:///./test.db"

# Create test database engine
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeMailer:
    """
    Stands in for MailDispatcher and records what would have been sent.
    """
    def __init__(self):
        self.welcome = []
        self.resets = []
        self.fail = False

    async def send_welcome(self, full_name, email, user_name, temp_password):
        if self.fail:
            raise MailDeliveryError("relay unavailable")
        self.welcome.append({
            "full_name": full_name,
            "email": email,
            "user_name": user_name,
            "temp_password": temp_password,
        })

    async def send_reset_instructions(self, email, reset_link):
        if self.fail:
            raise MailDeliveryError("relay unavailable")
        self.resets.append({"email": email, "reset_link": reset_link})


@pytest.fixture(scope="function")
def db():
    """
    Create a fresh database for each test.
    """
    # Create tables
    Base.metadata.create_all(bind=engine)

    # Create session
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    # Drop tables after test
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def mailer():
    return FakeMailer()


@pytest.fixture(scope="function")
def client(db, mailer):
    """
    Create a test client with a test database session and a recording mailer.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    # Override the dependencies
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mailer] = lambda: mailer

    # Create test client
    with TestClient(app) as client:
        yield client

    # Remove dependency override
    app.dependency_overrides = {}


@pytest.fixture
def create_user(db):
    """
    Factory that stores a user (and its role record) with a known password.
    """
    def _create_user(
        user_name="maria",
        email="maria@example.com",
        password="Senha123",
        role=UserRole.PATIENT,
        full_name="Maria Souza",
    ):
        user = User(
            full_name=full_name,
            email=email,
            user_name=user_name,
            role=role,
            password_hash=hash_password(password),
            city="Recife",
        )
        db.add(user)
        db.flush()
        if role == UserRole.PATIENT:
            db.add(Patient(user_id=user.id))
        else:
            db.add(Professional(user_id=user.id))
        db.commit()
        db.refresh(user)
        return user

    return _create_user
