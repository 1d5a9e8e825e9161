from pydantic import BaseModel, Field
from enum import IntEnum
from typing import List


class ClientCode(IntEnum):
    success = 0
    invalid_user = 1
    offer_not_found = 2
    insufficient_funds = 3
    storage_failure = 4
    catalog_unavailable = 5


# ==== Catalog files ===========================================================


class OfferModel(BaseModel):
    offer_id: str = Field(alias="OfferId")
    price: int = Field(alias="Price", ge=0)

    class Config:
        populate_by_name = True


class OfferLineModel(BaseModel):
    duration: int = Field(default=0, alias="Duration", ge=0)
    offers: List[OfferModel] = Field(default_factory=list, alias="Offers")

    class Config:
        populate_by_name = True


class ItemOfferModel(BaseModel):
    """One catalog file. Keys other than OfferLine are kept for the offer listing."""

    offer_line: List[OfferLineModel] = Field(default_factory=list, alias="OfferLine")

    class Config:
        populate_by_name = True
        extra = "allow"


# ==== Requests ================================================================


class ApplyOfferListModel(BaseModel):
    offer_ids: List[str] = Field(alias="OfferIds")
    history_from_time: int = Field(default=0, alias="HistoryFromTime")

    class Config:
        populate_by_name = True


# ==== Responses ===============================================================


class TransactionItemModel(BaseModel):
    state_name: str = Field(alias="stateName")
    state_type: int = Field(alias="stateType")
    own_type: int = Field(alias="ownType")
    operation_type: int = Field(alias="operationType")
    initial_value: int = Field(alias="initialValue")
    resulting_value: int = Field(alias="resultingValue")
    delta_value: int = Field(alias="deltaValue")
    desc_id: int = Field(alias="descId")

    class Config:
        populate_by_name = True


class ExtendedInfoItemModel(BaseModel):
    key: str = Field(default="", alias="Key")
    value: str = Field(default="", alias="Value")

    class Config:
        populate_by_name = True


class TransactionEntryModel(BaseModel):
    transaction_items: List[TransactionItemModel] = Field(alias="transactionItems")
    session_id: str = Field(alias="sessionId")
    reference_id: str = Field(alias="referenceId")
    offer_id: str = Field(alias="offerId")
    time_stamp: int = Field(alias="timeStamp")
    operation_type: int = Field(alias="operationType")
    extended_info_items: List[ExtendedInfoItemModel] = Field(
        default_factory=lambda: [ExtendedInfoItemModel()], alias="extendedInfoItems"
    )

    class Config:
        populate_by_name = True


class TransactionListModel(BaseModel):
    total_results: int = Field(alias="totalResults")
    transactions: List[TransactionEntryModel]

    class Config:
        populate_by_name = True
