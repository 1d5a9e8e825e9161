from uuid import uuid4

import pytest

from shop_server.domain.codes import (
    CurrencyKind,
    DescId,
    OfferCategory,
    OwnType,
    StateType,
)
from shop_server.domain.offer_rules import (
    build_currency_debit,
    build_entry_from_records,
    build_granted_effect,
    build_offer_definition,
    build_transaction_records,
    classify_offer,
    currency_kind_of,
    state_name_of,
)
from shop_server.models.schema_models import TransactionEntry


def test_currency_kind_follows_credits_suffix():
    assert currency_kind_of("xp_boost_1d_cr") == CurrencyKind.credits
    assert currency_kind_of("xp_boost_1d") == CurrencyKind.gold
    assert currency_kind_of("cr_bundle") == CurrencyKind.gold


def test_state_name_strips_only_the_trailing_suffix():
    assert state_name_of("xp_boost_1d_cr") == "xp_boost_1d"
    assert state_name_of("xp_boost_1d") == "xp_boost_1d"
    assert state_name_of("scr_cr_pack") == "scr_cr_pack"


@pytest.mark.parametrize(
    "offer_id, duration, expected",
    [
        ("weapon_loadout_rifle", 0, OfferCategory.loadout),
        ("armor_loadout_heavy_cr", 3600, OfferCategory.loadout),
        ("tactician_kit_offer", 0, OfferCategory.kit),
        ("challenge_headshots", 3600, OfferCategory.challenge),
        ("xp_boost_1d", 86400, OfferCategory.time_limited),
        ("free_emote", 0, OfferCategory.generic),
    ],
)
def test_classify_offer(offer_id, duration, expected):
    assert classify_offer(offer_id, duration) == expected


def test_loadout_effect_is_a_permanent_entitlement():
    offer = build_offer_definition("weapon_loadout_rifle_cr", 5, 0)

    effect = build_granted_effect(offer)

    assert effect.state_name == "weapon_loadout_rifle"
    assert effect.state_type == StateType.item
    assert effect.own_type == OwnType.owned
    assert (effect.initial_value, effect.resulting_value, effect.delta_value) == (0, 1, 1)
    assert effect.desc_id == DescId.default


def test_duration_effect_records_the_same_initial_and_resulting_value():
    offer = build_offer_definition("xp_boost_1d", 6, 86400)

    effect = build_granted_effect(offer)

    assert effect.state_type == StateType.duration
    assert effect.own_type == OwnType.time_limited
    assert (effect.initial_value, effect.resulting_value, effect.delta_value) == (86400, 86400, 0)
    assert effect.desc_id == DescId.duration


def test_currency_debit_uses_lowercase_state_name():
    debit = build_currency_debit(CurrencyKind.credits, 20, 15)

    assert debit.state_name == "credits"
    assert debit.state_type == StateType.credits
    assert debit.own_type == OwnType.not_owned
    assert debit.delta_value == 5
    assert build_currency_debit(CurrencyKind.gold, 10, 4).state_type == StateType.gold


def test_entry_rebuilt_from_its_records_is_identical():
    offer = build_offer_definition("xp_boost_1d_cr", 5, 86400)
    entry = TransactionEntry(
        offer_id=offer.offer_id,
        session_id=uuid4(),
        reference_id=uuid4(),
        timestamp=1700000000,
        granted_effect=build_granted_effect(offer),
        currency_debit=build_currency_debit(offer.currency_kind, 20, 15),
    )

    records = build_transaction_records(42, entry)

    assert [r.state_name for r in records] == ["xp_boost_1d", "credits"]
    assert all(r.user_id == 42 and r.reference_id == entry.reference_id for r in records)
    # Order of the stored pair does not matter.
    assert build_entry_from_records(list(reversed(records))) == entry


def test_entry_requires_one_effect_and_one_currency_record():
    offer = build_offer_definition("xp_boost_1d", 6, 86400)
    entry = TransactionEntry(
        offer_id=offer.offer_id,
        session_id=uuid4(),
        reference_id=uuid4(),
        timestamp=0,
        granted_effect=build_granted_effect(offer),
        currency_debit=build_currency_debit(offer.currency_kind, 6, 0),
    )
    effect_record, _ = build_transaction_records(1, entry)

    with pytest.raises(ValueError):
        build_entry_from_records([effect_record])
