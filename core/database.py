"""
Database session management with SQLAlchemy async
"""

import asyncio
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from core.config import settings
import logging

logger = logging.getLogger(__name__)

# asyncpg raises connection failures (refused, reset, connect timeout) unwrapped
DB_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)

# Shared by every batch writer of every run; each batch checks out its own connection
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_pre_ping=True,
)

# Create session factory
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False
)


async def get_session():
    """Get database session"""
    async with async_session_maker() as session:
        yield session
