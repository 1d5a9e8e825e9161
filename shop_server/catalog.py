"""Process-wide offer catalog.

The catalog is built once from the JSON files under the offers directory and
replaced wholesale on reload, so request handlers only ever read an immutable
snapshot and never touch the disk.
"""

import json
import logging
import pathlib
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping

from pydantic import ValidationError

from shop_server.domain.failures import ApplyFailure
from shop_server.domain.offer_rules import build_offer_definition
from shop_server.load_secrets import offers_directory
from shop_server.models.dc_models import ItemOfferModel
from shop_server.models.schema_models import OfferDefinition


@dataclass(frozen=True)
class CatalogSnapshot:
    offers: Mapping[str, OfferDefinition] = field(default_factory=lambda: MappingProxyType({}))
    item_offers: tuple = ()
    problems: tuple = ()


def build_snapshot(documents: Iterable[dict], problems: List[ApplyFailure] | None = None) -> CatalogSnapshot:
    """Flatten every offer line of every catalog document into one index

    Args:
        documents (Iterable[dict]): Parsed catalog files, in load order
        problems (List[ApplyFailure] | None): Problems already found while reading the files

    Returns:
        CatalogSnapshot: Offer index keyed by offer id plus the documents themselves
    """
    problems = list(problems or [])
    offers: dict[str, OfferDefinition] = {}
    kept_documents = []
    for document in documents:
        try:
            item_offer = ItemOfferModel.model_validate(document)
        except ValidationError as e:
            logging.error(f"Skipping malformed catalog document: {e}")
            problems.append(ApplyFailure.catalog_unavailable(str(e)))
            continue
        kept_documents.append(document)
        for offer_line in item_offer.offer_line:
            for offer in offer_line.offers:
                if offer.offer_id in offers:
                    # First definition wins.
                    logging.warning(f"Duplicate offer id in catalog ignored: {offer.offer_id}")
                    continue
                offers[offer.offer_id] = build_offer_definition(
                    offer.offer_id, offer.price, offer_line.duration
                )
    return CatalogSnapshot(
        offers=MappingProxyType(offers),
        item_offers=tuple(kept_documents),
        problems=tuple(problems),
    )


def read_catalog_documents(directory: pathlib.Path) -> tuple[list[dict], list[ApplyFailure]]:
    """Read every *.json file below directory in sorted path order.

    Unreadable files are skipped and reported instead of raised.
    """
    if not directory.is_dir():
        logging.warning(f"Offers directory not found, catalog is empty: {directory}")
        return [], [ApplyFailure.catalog_unavailable(f"missing directory {directory}")]

    documents: list[dict] = []
    problems: list[ApplyFailure] = []
    for file_path in sorted(directory.rglob("*.json")):
        try:
            with open(file_path, encoding="utf-8-sig") as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logging.error(f"Failed to read catalog file {file_path}: {e}")
            problems.append(ApplyFailure.catalog_unavailable(f"{file_path}: {e}"))
            continue
        if document is None:
            continue
        documents.append(document)
    return documents, problems


class OfferCatalog:
    """Read-only offer lookup shared by every request."""

    def __init__(self, directory: str | pathlib.Path | None = None):
        self.directory = pathlib.Path(directory) if directory is not None else None
        self._snapshot = CatalogSnapshot()

    @classmethod
    def from_documents(cls, documents: Iterable[dict]) -> "OfferCatalog":
        catalog = cls()
        catalog._snapshot = build_snapshot(documents)
        return catalog

    def reload(self) -> None:
        """Rebuild the index from disk and swap it in as one reference assignment."""
        if self.directory is None:
            return
        documents, problems = read_catalog_documents(self.directory)
        snapshot = build_snapshot(documents, problems)
        self._snapshot = snapshot
        logging.info(
            f"Offer catalog loaded: {len(snapshot.offers)} offers from {len(snapshot.item_offers)} files"
        )

    def resolve(self, offer_id: str) -> OfferDefinition | None:
        return self._snapshot.offers.get(offer_id)

    def duration_of(self, offer_id: str) -> int:
        offer = self.resolve(offer_id)
        if offer is None:
            return 0
        return offer.duration

    @property
    def item_offers(self) -> list[dict]:
        return list(self._snapshot.item_offers)

    @property
    def problems(self) -> list[ApplyFailure]:
        return list(self._snapshot.problems)

    def __len__(self) -> int:
        return len(self._snapshot.offers)

    def __contains__(self, offer_id: str) -> bool:
        return offer_id in self._snapshot.offers


offer_catalog = OfferCatalog(offers_directory)
