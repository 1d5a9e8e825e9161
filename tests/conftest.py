import copy

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from shop_server.catalog import OfferCatalog
from shop_server.create_sqlite_engine import use_immediate_transactions
from shop_server.db import create_tables, make_session_factory
from shop_server.services.offer_service import OfferApplicationService

CATALOG_DOCUMENTS = [
    {
        "Id": "loadouts",
        "OfferLine": [
            {
                "Duration": 0,
                "Offers": [
                    {"OfferId": "weapon_loadout_rifle", "Price": 50},
                    {"OfferId": "weapon_loadout_rifle_cr", "Price": 5},
                    {"OfferId": "armor_loadout_heavy", "Price": 30},
                ],
            }
        ],
    },
    {
        "Id": "boosts",
        "OfferLine": [
            {
                "Duration": 86400,
                "Offers": [
                    {"OfferId": "xp_boost_1d", "Price": 6},
                    {"OfferId": "xp_boost_1d_cr", "Price": 5},
                ],
            },
            {
                "Duration": 604800,
                "Offers": [{"OfferId": "xp_boost_7d", "Price": 6}],
            },
        ],
    },
    {
        "Id": "classes",
        "OfferLine": [
            {
                "Offers": [
                    {"OfferId": "ranger_kit_offer", "Price": 10},
                    {"OfferId": "sniper_kit_offer", "Price": 10},
                    {"OfferId": "free_emote", "Price": 0},
                ],
            },
            {
                "Duration": 3600,
                "Offers": [{"OfferId": "challenge_headshots", "Price": 3}],
            },
        ],
    },
]


@pytest.fixture
def catalog_documents() -> list[dict]:
    return copy.deepcopy(CATALOG_DOCUMENTS)


@pytest.fixture
def catalog(catalog_documents) -> OfferCatalog:
    return OfferCatalog.from_documents(catalog_documents)


@pytest_asyncio.fixture
async def engine(tmp_path):
    test_engine = use_immediate_transactions(
        create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'shop.sqlite3'}")
    )
    await create_tables(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def offer_service(session_factory, catalog) -> OfferApplicationService:
    return OfferApplicationService(session_factory, catalog)
