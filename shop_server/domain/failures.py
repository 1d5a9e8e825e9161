from dataclasses import dataclass
from enum import Enum

from shop_server.domain.codes import CurrencyKind


class FailureKind(str, Enum):
    invalid_user = "InvalidUser"
    offer_not_found = "OfferNotFound"
    insufficient_funds = "InsufficientFunds"
    storage_failure = "StorageFailure"
    catalog_unavailable = "CatalogUnavailable"


@dataclass(frozen=True)
class ApplyFailure:
    """Why a batch was aborted. Nothing from the batch was committed."""

    kind: FailureKind
    offer_id: str | None = None
    currency_kind: CurrencyKind | None = None
    detail: str | None = None

    @classmethod
    def invalid_user(cls) -> "ApplyFailure":
        return cls(FailureKind.invalid_user)

    @classmethod
    def offer_not_found(cls, offer_id: str) -> "ApplyFailure":
        return cls(FailureKind.offer_not_found, offer_id=offer_id)

    @classmethod
    def insufficient_funds(cls, offer_id: str, currency_kind: CurrencyKind) -> "ApplyFailure":
        return cls(FailureKind.insufficient_funds, offer_id=offer_id, currency_kind=currency_kind)

    @classmethod
    def storage_failure(cls, detail: str) -> "ApplyFailure":
        return cls(FailureKind.storage_failure, detail=detail)

    @classmethod
    def catalog_unavailable(cls, detail: str) -> "ApplyFailure":
        return cls(FailureKind.catalog_unavailable, detail=detail)

    @property
    def message(self) -> str:
        if self.kind == FailureKind.invalid_user:
            return "Invalid user ID"
        if self.kind == FailureKind.offer_not_found:
            return f"Offer not found: {self.offer_id}"
        if self.kind == FailureKind.insufficient_funds:
            return f"Insufficient {self.currency_kind.value}"
        if self.kind == FailureKind.catalog_unavailable:
            return f"Offer catalog unavailable: {self.detail}"
        return f"Storage failure: {self.detail}"
