"""
Main FastAPI application entry point.
Configures the application, middleware, and includes routers.
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from contextlib import asynccontextmanager
from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
import logging
from .auth.router import router as auth_router
from .users.router import router as users_router
from .database import engine, Base
from .config import settings
# Import all models here for creating tables
from .auth import models as auth_models  # noqa: F401
from .patients import models as patient_models  # noqa: F401
from .professionals import models as professional_models  # noqa: F401
from .core.mail import MailDispatcher
from .exceptions import register_exception_handlers
from .core.middleware import setup_middlewares

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Create tables if they don't exist and build the shared mail dispatcher.
    """
    logger.info("🚀 Starting AVASOFT API...")
    Base.metadata.create_all(bind=engine)
    app.state.mailer = MailDispatcher.from_settings(settings)
    yield
    logger.info("AVASOFT API shutting down")

# Create FastAPI application
app = FastAPI(
    title="AVASOFT API",
    description="Accounts API for the AVASOFT anthropometric assessment system",
    version="1.0.0",
    lifespan=lifespan,
)

# Register exception handlers
register_exception_handlers(app)

# Configure CORS middleware for the known frontends
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.frontend_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware
setup_middlewares(app)

# Include routers
app.include_router(auth_router)
app.include_router(users_router)

# Root endpoint
@app.get("/")
def root():
    """
    Root endpoint for API health check.

    Returns:
        dict: Simple welcome message
    """
    return {"message": "Welcome to AVASOFT API", "version": app.version}

# Health check endpoint
@app.get("/health")
def health_check():
    """
    Health check endpoint for monitoring.

    Runs a trivial query so a lost database connection shows up as 503.

    Returns:
        dict: Health status information
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {str(e)}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "database": "disconnected"},
        )
    return {"status": "healthy", "database": "connected"}
