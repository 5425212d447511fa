from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from app.core.config import settings


def async_database_url(url: str) -> str:
    """postgres:// и postgresql:// из окружения переводятся на драйвер asyncpg."""
    for prefix in ("postgresql://", "postgres://"):
        if url.startswith(prefix):
            return "postgresql+asyncpg://" + url[len(prefix):]
    return url


engine = create_async_engine(
    async_database_url(settings.DATABASE_URL),
    echo=settings.DB_ECHO,
    pool_pre_ping=True
)

# Пользователь отдаётся в ответ после commit, поэтому атрибуты не истекают
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False
)


async def get_db():
    """Сессия БД на время запроса"""
    async with AsyncSessionLocal() as session:
        yield session
