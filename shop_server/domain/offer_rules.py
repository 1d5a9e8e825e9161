"""Offer rules that are independent from HTTP and DB.

Rule of thumb:
- OK: identifier conventions, classification, building transaction lines.
- Not OK: touching DB sessions, reading catalog files, uuid7(), etc.
"""

from shop_server.domain.codes import (
    CHALLENGE_PREFIX,
    CREDITS_SUFFIX,
    KIT_OFFER_IDS,
    LOADOUT_PREFIXES,
    CurrencyKind,
    DescId,
    OfferCategory,
    OwnType,
    StateType,
)
from shop_server.models.schema_models import (
    CurrencyDebit,
    GrantedEffect,
    OfferDefinition,
    TransactionEntry,
    TransactionRecordSchema,
)


def currency_kind_of(offer_id: str) -> CurrencyKind:
    """Offers priced in credits carry the reserved suffix; everything else costs gold."""
    if offer_id.endswith(CREDITS_SUFFIX):
        return CurrencyKind.credits
    return CurrencyKind.gold


def state_name_of(offer_id: str) -> str:
    """Return the user state name an offer grants (currency suffix stripped)."""
    return offer_id.removesuffix(CREDITS_SUFFIX)


def currency_state_name(currency_kind: CurrencyKind) -> str:
    return currency_kind.value.lower()


def currency_state_type(currency_kind: CurrencyKind) -> StateType:
    if currency_kind == CurrencyKind.credits:
        return StateType.credits
    return StateType.gold


def is_currency_state_type(state_type: int) -> bool:
    return state_type in (StateType.credits, StateType.gold)


def classify_offer(offer_id: str, duration: int) -> OfferCategory:
    """Map an offer identifier to its category.

    Loadout prefixes win over everything else; kit ids are a closed set;
    challenges are matched by prefix. Remaining offers are time-limited when
    their offer line schedules a duration, generic otherwise.
    """
    if offer_id.startswith(LOADOUT_PREFIXES):
        return OfferCategory.loadout
    if offer_id in KIT_OFFER_IDS:
        return OfferCategory.kit
    if offer_id.startswith(CHALLENGE_PREFIX):
        return OfferCategory.challenge
    if duration > 0:
        return OfferCategory.time_limited
    return OfferCategory.generic


def build_offer_definition(offer_id: str, price: int, duration: int) -> OfferDefinition:
    return OfferDefinition(
        offer_id=offer_id,
        price=price,
        currency_kind=currency_kind_of(offer_id),
        category=classify_offer(offer_id, duration),
        duration=duration,
    )


def build_granted_effect(offer: OfferDefinition) -> GrantedEffect:
    """Build the effect line of an offer.

    Loadouts grant a permanent entitlement and always record 0 -> 1. Every
    other category records its offer line duration as both the initial and the
    resulting value; the currency line carries the observable delta.
    """
    state_name = state_name_of(offer.offer_id)
    if offer.category == OfferCategory.loadout:
        return GrantedEffect(
            state_name=state_name,
            state_type=StateType.item,
            own_type=OwnType.owned,
            initial_value=0,
            resulting_value=1,
            delta_value=1,
            desc_id=DescId.default,
        )
    return GrantedEffect(
        state_name=state_name,
        state_type=StateType.duration,
        own_type=OwnType.time_limited,
        initial_value=offer.duration,
        resulting_value=offer.duration,
        delta_value=0,
        desc_id=DescId.duration,
    )


def build_currency_debit(
    currency_kind: CurrencyKind, initial_value: int, resulting_value: int
) -> CurrencyDebit:
    return CurrencyDebit(
        state_name=currency_state_name(currency_kind),
        state_type=currency_state_type(currency_kind),
        own_type=OwnType.not_owned,
        initial_value=initial_value,
        resulting_value=resulting_value,
        delta_value=initial_value - resulting_value,
        desc_id=DescId.default,
    )


def build_transaction_records(
    user_id: int,
    entry: TransactionEntry,
) -> list[TransactionRecordSchema]:
    """Flatten an entry into the record pair the ledger persists (effect first)."""
    return [
        TransactionRecordSchema(
            user_id=user_id,
            offer_id=entry.offer_id,
            initial_value=line.initial_value,
            resulting_value=line.resulting_value,
            delta_value=line.delta_value,
            operation_type=line.operation_type,
            session_id=entry.session_id,
            reference_id=entry.reference_id,
            timestamp=entry.timestamp,
            state_name=line.state_name,
            state_type=line.state_type,
            own_type=line.own_type,
            desc_id=line.desc_id,
        )
        for line in (entry.granted_effect, entry.currency_debit)
    ]


def build_entry_from_records(
    records: list[TransactionRecordSchema],
) -> TransactionEntry:
    """Rebuild a TransactionEntry from the record pair of one processed offer.

    Raises:
        ValueError: The records do not form one effect line and one currency line.
    """
    effects = [r for r in records if not is_currency_state_type(r.state_type)]
    debits = [r for r in records if is_currency_state_type(r.state_type)]
    if len(effects) != 1 or len(debits) != 1:
        raise ValueError(
            f"Expected one effect and one currency record, got {len(effects)} and {len(debits)}"
        )
    effect, debit = effects[0], debits[0]
    return TransactionEntry(
        offer_id=effect.offer_id,
        session_id=effect.session_id,
        reference_id=effect.reference_id,
        timestamp=effect.timestamp,
        operation_type=effect.operation_type,
        granted_effect=GrantedEffect(**_line_fields(effect)),
        currency_debit=CurrencyDebit(**_line_fields(debit)),
    )


def _line_fields(record: TransactionRecordSchema) -> dict:
    return {
        "state_name": record.state_name,
        "state_type": record.state_type,
        "own_type": record.own_type,
        "operation_type": record.operation_type,
        "initial_value": record.initial_value,
        "resulting_value": record.resulting_value,
        "delta_value": record.delta_value,
        "desc_id": record.desc_id,
    }
