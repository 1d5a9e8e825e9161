from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from shop_server.load_secrets import db_backend

if db_backend == "sqlite":
    from shop_server.create_sqlite_engine import engine
else:
    from shop_server.create_postgres_engine import engine

from shop_server.models.schemas import Base


def make_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Build a session factory whose sessions keep loaded rows usable after commit."""
    return async_sessionmaker(
        autocommit=False,
        class_=AsyncSession,
        autoflush=True,
        expire_on_commit=False,
        bind=bind,
    )


# Centralized session factory to avoid creating it in router modules.
Session = make_session_factory(engine)


async def create_tables(bind: AsyncEngine = engine) -> None:
    """Create the userstates and transactions tables if they do not exist."""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
