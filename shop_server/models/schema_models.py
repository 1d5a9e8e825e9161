from pydantic import BaseModel
from typing import Literal
from uuid import UUID
from datetime import datetime

from shop_server.domain.codes import (
    CurrencyKind,
    DescId,
    OfferCategory,
    OperationType,
    OwnType,
    StateType,
)


class OfferDefinition(BaseModel):
    offer_id: str
    price: int
    currency_kind: CurrencyKind
    category: OfferCategory
    duration: int = 0

    class Config:
        frozen = True


class UserStateSchema(BaseModel):
    user_id: int
    state_name: str
    value: int
    own_type: OwnType
    state_type: StateType
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class TransactionRecordSchema(BaseModel):
    user_id: int
    offer_id: str
    initial_value: int
    resulting_value: int
    delta_value: int
    operation_type: OperationType
    session_id: UUID
    reference_id: UUID
    timestamp: int
    state_name: str
    state_type: StateType
    own_type: OwnType
    desc_id: DescId
    transaction_id: int | None = None

    class Config:
        from_attributes = True


class TransactionLine(BaseModel):
    state_name: str
    state_type: StateType
    own_type: OwnType
    operation_type: OperationType = OperationType.purchase
    initial_value: int
    resulting_value: int
    delta_value: int
    desc_id: DescId = DescId.default

    class Config:
        frozen = True


class GrantedEffect(TransactionLine):
    """Entitlement flag or time-limited duration granted by an offer."""

    line_kind: Literal["granted_effect"] = "granted_effect"


class CurrencyDebit(TransactionLine):
    """Currency balance before and after paying for an offer."""

    line_kind: Literal["currency_debit"] = "currency_debit"


class TransactionEntry(BaseModel):
    offer_id: str
    session_id: UUID
    reference_id: UUID
    timestamp: int
    granted_effect: GrantedEffect
    currency_debit: CurrencyDebit
    operation_type: OperationType = OperationType.purchase

    class Config:
        frozen = True
