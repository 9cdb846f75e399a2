from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from todolist.core.config import get_settings

settings = get_settings()

# Create async engine
engine = create_async_engine(
    settings.database_url,
    echo=settings.db_echo,
    future=True,
    pool_pre_ping=settings.db_pool_pre_ping,
)

# Create async session factory using async_sessionmaker
async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


# Dependency for getting DB session, one per request
async def get_db():
    async with async_session() as session:
        yield session


# Schema is owned by alembic; this is only for tests and throwaway databases.
async def create_db_and_tables(bind=engine):
    async with bind.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
