"""DB service layer for offer purchases.

- Routers should not touch DB sessions directly; they call this module.
- This layer owns session/transaction boundaries: one transaction per batch.
- CRUD helpers used here never commit.
"""

import asyncio
import logging
from typing import Callable, List, Sequence
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from uuid6 import uuid7

from shop_server.catalog import OfferCatalog
from shop_server.crud import TransactionLedger, UserStateStore
from shop_server.domain.codes import CLASS_SELECT_TOKEN, OfferCategory, OwnType
from shop_server.domain.failures import ApplyFailure
from shop_server.domain.offer_rules import (
    build_currency_debit,
    build_entry_from_records,
    build_granted_effect,
    build_transaction_records,
    currency_state_name,
    currency_state_type,
)
from shop_server.models.schema_models import (
    GrantedEffect,
    OfferDefinition,
    TransactionEntry,
    TransactionRecordSchema,
)


class OfferApplicationService:
    """Applies batches of offers for a user as one all-or-nothing unit of work."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        catalog: OfferCatalog,
        timeout_seconds: float | None = None,
        id_factory: Callable[[], UUID] = uuid7,
    ):
        self._session_factory = session_factory
        self._catalog = catalog
        self._timeout_seconds = timeout_seconds or None
        self._id_factory = id_factory

    async def apply(
        self, user_id: int | None, offer_ids: Sequence[str], history_timestamp: int
    ) -> List[TransactionEntry] | ApplyFailure:
        """Apply every offer of the batch in order, or none of them

        Args:
            user_id (int | None): Buyer, None when the request carried no identity
            offer_ids (Sequence[str]): Offers in the order the client submitted them
            history_timestamp (int): Client "history-from" time stamped on every record

        Returns:
            List[TransactionEntry] | ApplyFailure: One entry per offer, or why nothing was applied
        """
        if user_id is None:
            return ApplyFailure.invalid_user()

        try:
            return await asyncio.wait_for(
                self._apply_batch(user_id, list(offer_ids), history_timestamp),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            logging.error(f"Offer batch for user {user_id} timed out and was rolled back")
            return ApplyFailure.storage_failure(f"timed out after {self._timeout_seconds} seconds")

    async def get_transaction_history(
        self, user_id: int | None
    ) -> List[TransactionEntry] | ApplyFailure:
        """Rebuild the user's entries from the ledger, oldest first"""
        if user_id is None:
            return ApplyFailure.invalid_user()

        try:
            async with self._session_factory() as session:
                records = await TransactionLedger.list_for_user(user_id, session)
        except SQLAlchemyError as e:
            logging.error(f"Failed to read transaction history for user {user_id}: {e}")
            return ApplyFailure.storage_failure(str(e))

        groups: dict[UUID, List[TransactionRecordSchema]] = {}
        for record in records:
            groups.setdefault(record.reference_id, []).append(record)

        entries = []
        for reference_id, group in groups.items():
            try:
                entries.append(build_entry_from_records(group))
            except ValueError as e:
                logging.error(f"Skipping unreadable transaction {reference_id}: {e}")
        return entries

    async def _apply_batch(
        self, user_id: int, offer_ids: List[str], history_timestamp: int
    ) -> List[TransactionEntry] | ApplyFailure:
        async with self._session_factory() as session:
            try:
                await session.begin()
                entries: List[TransactionEntry] = []
                for offer_id in offer_ids:
                    outcome = await self._apply_offer(session, user_id, offer_id, history_timestamp)
                    if isinstance(outcome, ApplyFailure):
                        await session.rollback()
                        logging.info(f"Offer batch for user {user_id} aborted: {outcome.message}")
                        return outcome
                    entries.append(outcome)
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logging.error(f"Offer batch for user {user_id} rolled back: {e}")
                return ApplyFailure.storage_failure(str(e))
            except BaseException:
                # Cancellation or an unexpected error: nothing may survive.
                await session.rollback()
                logging.warning(f"Offer batch for user {user_id} interrupted and rolled back")
                raise

        logging.info(f"Applied {len(entries)} offers for user {user_id}")
        return entries

    async def _apply_offer(
        self, session: AsyncSession, user_id: int, offer_id: str, history_timestamp: int
    ) -> TransactionEntry | ApplyFailure:
        offer = self._catalog.resolve(offer_id)
        if offer is None:
            return ApplyFailure.offer_not_found(offer_id)

        currency_name = currency_state_name(offer.currency_kind)
        balance = await UserStateStore.read(user_id, currency_name, session, for_update=True)
        if balance < offer.price:
            return ApplyFailure.insufficient_funds(offer_id, offer.currency_kind)
        resulting_balance = balance - offer.price

        granted_effect = build_granted_effect(offer)
        await self._grant(session, user_id, offer, granted_effect)
        await UserStateStore.write(
            user_id,
            currency_name,
            resulting_balance,
            OwnType.not_owned,
            currency_state_type(offer.currency_kind),
            session,
        )

        entry = TransactionEntry(
            offer_id=offer_id,
            session_id=self._id_factory(),
            reference_id=self._id_factory(),
            timestamp=history_timestamp,
            granted_effect=granted_effect,
            currency_debit=build_currency_debit(offer.currency_kind, balance, resulting_balance),
        )
        for record in build_transaction_records(user_id, entry):
            await TransactionLedger.append(record, session)
        return entry

    async def _grant(
        self,
        session: AsyncSession,
        user_id: int,
        offer: OfferDefinition,
        granted_effect: GrantedEffect,
    ) -> None:
        await UserStateStore.write(
            user_id,
            granted_effect.state_name,
            granted_effect.resulting_value,
            granted_effect.own_type,
            granted_effect.state_type,
            session,
        )
        if offer.category == OfferCategory.kit:
            await UserStateStore.write(
                user_id, CLASS_SELECT_TOKEN, 0, OwnType.not_owned, None, session
            )
