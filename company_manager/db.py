from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from company_manager.load_secrets import database_url
from company_manager.models.schemas import Base

engine = create_async_engine(database_url, echo=False)

# Centralized session factory to avoid creating it in router modules.
Session = async_sessionmaker(
    autocommit=False,
    class_=AsyncSession,
    autoflush=True,
    expire_on_commit=False,
    bind=engine,
)


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create tables if not exists"""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
