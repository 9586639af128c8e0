from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from payroll_api.core.config import settings

# The engine owns the connection pool; sessions borrow a connection per request.
# - pool_pre_ping: verify connections are alive before use
# - pool_recycle: recycle connections after 1 hour to avoid DB-side timeouts
# - pool_timeout: wait up to 30s for a free connection before raising
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.SQLALCHEMY_ECHO,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_pre_ping=True,
    pool_recycle=3600,
    pool_timeout=30,
)

AsyncSessionLocal = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


async def check_db_connection() -> bool:
    """
    Verify database connectivity. Used by the health check.
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
