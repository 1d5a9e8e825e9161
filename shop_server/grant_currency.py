import argparse
import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from shop_server.crud import UserStateStore
from shop_server.db import Session, create_tables
from shop_server.domain.codes import CurrencyKind, OwnType
from shop_server.domain.offer_rules import currency_state_name, currency_state_type

logging.basicConfig(level=logging.INFO)


def non_negative_int(value: str) -> int:
    amount = int(value)
    if amount < 0:
        raise argparse.ArgumentTypeError("amount must be >= 0")
    return amount


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Set a user's currency balance")
    parser.add_argument("--user-id", type=int, help="User id", required=True)
    parser.add_argument(
        "--currency",
        type=str,
        choices=[currency_state_name(kind) for kind in CurrencyKind],
        help="Currency state name",
        required=True,
    )
    parser.add_argument("--amount", type=non_negative_int, help="New balance", required=True)
    return parser


async def set_balance(
    session_factory: async_sessionmaker[AsyncSession],
    user_id: int,
    currency_kind: CurrencyKind,
    amount: int,
) -> int:
    """Overwrite the user's balance of one currency in its own transaction

    Args:
        session_factory (async_sessionmaker[AsyncSession]): Where the balance lives
        user_id (int): Owner of the balance
        currency_kind (CurrencyKind): Currency to set
        amount (int): New balance, never negative

    Returns:
        int: The previous balance
    """
    state_name = currency_state_name(currency_kind)
    async with session_factory() as session:
        async with session.begin():
            previous = await UserStateStore.read(user_id, state_name, session, for_update=True)
            await UserStateStore.write(
                user_id,
                state_name,
                amount,
                OwnType.not_owned,
                currency_state_type(currency_kind),
                session,
            )
    return previous


async def main(user_id: int, currency: str, amount: int):
    await create_tables()
    currency_kind = next(kind for kind in CurrencyKind if currency_state_name(kind) == currency)
    previous = await set_balance(Session, user_id, currency_kind, amount)
    logging.info(f"user {user_id} {currency}: {previous} -> {amount}")


if __name__ == "__main__":
    parser = get_parser()
    args = parser.parse_args()
    asyncio.run(main(args.user_id, args.currency, args.amount))
