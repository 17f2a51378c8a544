import uuid

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker, AsyncEngine
from sqlalchemy.orm import DeclarativeBase

from marketplace.config import Config


# SQLAlchemy Base for ORM models
class Base(DeclarativeBase):
    pass


def get_async_url(url: str, db_type: str) -> str:
    """Convert database URL to async SQLAlchemy format."""
    db_type = db_type.lower()
    if db_type == "postgresql":
        return url.replace("postgresql://", "postgresql+asyncpg://")
    elif db_type == "sqlite":
        return url.replace("sqlite://", "sqlite+aiosqlite://")
    return url


# Async engine for SQLAlchemy
engine = create_async_engine(
    get_async_url(Config.DATABASE_URL, Config.DATABASE_TYPE),
    echo=False
)

# Session factory
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_session() -> AsyncSession:
    async with async_session() as session:
        yield session


class Database:
    """Owns the engine lifecycle for the application."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    async def connect(self):
        """Create tables that do not exist yet."""
        # Register every mapped table on Base.metadata
        import marketplace.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def disconnect(self):
        """Close database engine."""
        await self.engine.dispose()


db = Database(engine)


def generate_id() -> str:
    """Opaque string primary key."""
    return str(uuid.uuid4())
