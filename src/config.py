"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.

    Attributes:
        database_url: Database connection string (PostgreSQL in production)
        jwt_secret: Secret key for JWT token signing
        algorithm: Algorithm used for JWT encoding (typically HS256)
        access_token_expire_minutes: Access token expiration time in minutes
        reset_token_expire_minutes: Password reset token lifetime in minutes
        bcrypt_rounds: Cost factor for password hashing

        # Email settings
        email_user: SMTP account username
        email_pass: SMTP account password
        mail_from: Sender email address (defaults to email_user)
        mail_from_name: Display name for outgoing mail
        mail_port: SMTP server port
        mail_server: SMTP server hostname
        mail_starttls: Whether to use STARTTLS
        mail_ssl_tls: Whether to use SSL/TLS
        mail_timeout_seconds: Upper bound for a single email send
        mail_suppress_send: Render and record mail without contacting the relay

        # Frontend settings
        frontend_url: Production frontend, used when no known origin matches
        frontend_origins: Known frontends that may request reset links
    """
    # Database settings
    database_url: str

    # JWT settings
    jwt_secret: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    reset_token_expire_minutes: int = 60
    bcrypt_rounds: int = 10

    # Email settings
    email_user: str
    email_pass: str
    mail_from: Optional[str] = None
    mail_from_name: str = "AVASOFT"
    mail_port: int = 587
    mail_server: str = "smtp.gmail.com"
    mail_starttls: bool = True
    mail_ssl_tls: bool = False
    mail_timeout_seconds: int = 30
    mail_suppress_send: bool = False

    # Frontend settings
    frontend_url: str = "https://avasoft-landingpage.netlify.app"
    frontend_origins: List[str] = [
        "http://localhost:3001",
        "https://avasoft-landingpage.netlify.app",
    ]

    log_level: str = "INFO"

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    @property
    def sender_address(self) -> str:
        return self.mail_from or self.email_user

# Create settings instance
settings = Settings()
