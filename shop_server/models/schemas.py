from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.schema import Column, UniqueConstraint
from sqlalchemy.types import BigInteger, Integer, String, Uuid, DateTime
from uuid6 import uuid7
from datetime import datetime


class Base(DeclarativeBase):
    pass


class UserState(Base):
    __tablename__ = "userstates"
    __table_args__ = (
        UniqueConstraint("user_id", "state_name", name="uq_userstates_user_state"),
    )
    user_state_id = Column(Uuid, primary_key=True, default=uuid7)
    user_id = Column(Integer, nullable=False, index=True)
    state_name = Column(String, nullable=False)
    value = Column(Integer, nullable=False, default=0)
    own_type = Column(Integer, nullable=False, default=0)
    state_type = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)


class TransactionRecord(Base):
    """One persisted transaction line. Rows are appended, never updated."""

    __tablename__ = "transactions"
    # Autoincrement id doubles as the insertion order for history reads.
    transaction_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False, index=True)
    offer_id = Column(String, nullable=False)
    initial_value = Column(Integer, nullable=False)
    resulting_value = Column(Integer, nullable=False)
    delta_value = Column(Integer, nullable=False)
    operation_type = Column(Integer, nullable=False)
    session_id = Column(Uuid, nullable=False)
    reference_id = Column(Uuid, nullable=False, index=True)
    timestamp = Column(BigInteger, nullable=False)
    state_name = Column(String, nullable=False)
    state_type = Column(Integer, nullable=False)
    own_type = Column(Integer, nullable=False)
    desc_id = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.now)
