import pathlib

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from shop_server.load_secrets import sqlite_path

if sqlite_path:
    file_path = pathlib.Path(sqlite_path)
else:
    file_path = pathlib.Path(__file__).parents[1]
    file_path /= "./shop_server/shop.sqlite3"
sqlite_url = f"sqlite+aiosqlite:///{file_path}"


def use_immediate_transactions(engine: AsyncEngine) -> AsyncEngine:
    """Take SQLite's write lock when a transaction begins.

    The driver otherwise defers BEGIN until the first write, so a balance read
    would run outside the transaction and two batches could debit the same
    stale balance.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


engine = use_immediate_transactions(create_async_engine(url=sqlite_url, echo=False))
