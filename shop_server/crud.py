"""Storage helpers for user states and the transaction ledger.

Every helper runs on the caller's session and never commits: the service
layer owns the unit of work.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List

from shop_server.domain.codes import OwnType, StateType
from shop_server.models.schema_models import TransactionRecordSchema, UserStateSchema
from shop_server.models.schemas import TransactionRecord, UserState


class UserStateStore:
    @staticmethod
    async def _find(
        user_id: int, state_name: str, session: AsyncSession, for_update: bool = False
    ) -> UserState | None:
        stmt = select(UserState).where(
            UserState.user_id == user_id, UserState.state_name == state_name
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        return result.scalars().first()

    @staticmethod
    async def read(
        user_id: int, state_name: str, session: AsyncSession, for_update: bool = False
    ) -> int:
        """Read one user state value

        Args:
            user_id (int): Owner of the state
            state_name (str): Name of the state, e.g. "gold" or a stripped offer id
            session (AsyncSession): Session of the active unit of work
            for_update (bool): Lock the row until the unit of work ends

        Returns:
            int: Stored value, 0 when the state was never acquired
        """
        row = await UserStateStore._find(user_id, state_name, session, for_update)
        if row is None:
            return 0
        return row.value

    @staticmethod
    async def write(
        user_id: int,
        state_name: str,
        value: int,
        own_type: OwnType,
        state_type: StateType | None,
        session: AsyncSession,
    ) -> None:
        """Update the state in place, or insert it when it does not exist yet.

        A state_type of None keeps the stored type of an existing row and
        inserts new rows as items.
        """
        row = await UserStateStore._find(user_id, state_name, session)
        if row is None:
            session.add(
                UserState(
                    user_id=user_id,
                    state_name=state_name,
                    value=value,
                    own_type=int(own_type),
                    state_type=int(StateType.item if state_type is None else state_type),
                )
            )
        else:
            row.value = value
            row.own_type = int(own_type)
            if state_type is not None:
                row.state_type = int(state_type)
        await session.flush()

    @staticmethod
    async def list_for_user(user_id: int, session: AsyncSession) -> List[UserStateSchema]:
        stmt = (
            select(UserState)
            .where(UserState.user_id == user_id)
            .order_by(UserState.state_name)
        )
        result = await session.execute(stmt)
        return [UserStateSchema.model_validate(row) for row in result.scalars().all()]


class TransactionLedger:
    @staticmethod
    async def append(record: TransactionRecordSchema, session: AsyncSession) -> None:
        """Append one record to the ledger inside the active unit of work"""
        session.add(
            TransactionRecord(
                user_id=record.user_id,
                offer_id=record.offer_id,
                initial_value=record.initial_value,
                resulting_value=record.resulting_value,
                delta_value=record.delta_value,
                operation_type=int(record.operation_type),
                session_id=record.session_id,
                reference_id=record.reference_id,
                timestamp=record.timestamp,
                state_name=record.state_name,
                state_type=int(record.state_type),
                own_type=int(record.own_type),
                desc_id=int(record.desc_id),
            )
        )
        await session.flush()

    @staticmethod
    async def list_for_user(user_id: int, session: AsyncSession) -> List[TransactionRecordSchema]:
        """Read every record of the user in insertion order

        Args:
            user_id (int): Owner of the records
            session (AsyncSession): AsyncSession object to interact with database

        Returns:
            List[TransactionRecordSchema]: Records, oldest first
        """
        stmt = (
            select(TransactionRecord)
            .where(TransactionRecord.user_id == user_id)
            .order_by(TransactionRecord.transaction_id)
        )
        result = await session.execute(stmt)
        return [TransactionRecordSchema.model_validate(row) for row in result.scalars().all()]
