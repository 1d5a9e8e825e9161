"""Enumerations and reserved identifiers shared by the catalog, the stores and the wire.

Integer codes are what the game client and the persisted rows carry, so their
values must not change.
"""

from enum import Enum, IntEnum


class CurrencyKind(str, Enum):
    credits = "Credits"
    gold = "Gold"


class OfferCategory(str, Enum):
    loadout = "Loadout"
    kit = "Kit"
    challenge = "Challenge"
    time_limited = "TimeLimited"
    generic = "Generic"


class StateType(IntEnum):
    item = 0
    credits = 2
    gold = 3
    duration = 4


class OwnType(IntEnum):
    not_owned = 0  # currency rows and revoked entitlements
    owned = 1
    time_limited = 2


class OperationType(IntEnum):
    purchase = 0


class DescId(IntEnum):
    default = 0
    duration = 2


CREDITS_SUFFIX = "_cr"
LOADOUT_PREFIXES = ("weapon_loadout", "armor_loadout")
CHALLENGE_PREFIX = "challenge"
KIT_OFFER_IDS = frozenset(
    {
        "ranger_kit_offer",
        "sniper_kit_offer",
        "tactician_kit_offer",
    }
)
CLASS_SELECT_TOKEN = "class_select_token"
