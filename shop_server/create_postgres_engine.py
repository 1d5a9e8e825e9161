from sqlalchemy.ext.asyncio import create_async_engine
from shop_server.load_secrets import user, password, host, port, db_name

POSTGRES_DATABASE_URL = (
    f"postgresql+asyncpg://{user}:{password}@{host}:{port}/{db_name}"
)

# READ COMMITTED + SELECT ... FOR UPDATE on the currency rows serializes
# concurrent batches of the same user.
engine = create_async_engine(
    POSTGRES_DATABASE_URL,
    pool_size=20,
    max_overflow=20,
    isolation_level="READ COMMITTED",
)
