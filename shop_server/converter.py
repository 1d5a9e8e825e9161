from typing import List

from shop_server.domain.failures import ApplyFailure, FailureKind
from shop_server.models.dc_models import (
    ClientCode,
    TransactionEntryModel,
    TransactionItemModel,
    TransactionListModel,
)
from shop_server.models.schema_models import TransactionEntry, TransactionLine

FAILURE_CODES = {
    FailureKind.invalid_user: ClientCode.invalid_user,
    FailureKind.offer_not_found: ClientCode.offer_not_found,
    FailureKind.insufficient_funds: ClientCode.insufficient_funds,
    FailureKind.storage_failure: ClientCode.storage_failure,
    FailureKind.catalog_unavailable: ClientCode.catalog_unavailable,
}


class DataConverter:
    """This class is used to convert data between different formats."""

    def convert_line_to_item_model(self, line: TransactionLine) -> TransactionItemModel:
        return TransactionItemModel(
            state_name=line.state_name,
            state_type=int(line.state_type),
            own_type=int(line.own_type),
            operation_type=int(line.operation_type),
            initial_value=line.initial_value,
            resulting_value=line.resulting_value,
            delta_value=line.delta_value,
            desc_id=int(line.desc_id),
        )

    def convert_entry_to_entry_model(self, entry: TransactionEntry) -> TransactionEntryModel:
        """Convert a TransactionEntry to the shape the game client expects

        Args:
            entry (TransactionEntry): One processed offer

        Returns:
            TransactionEntryModel: The granted effect line followed by the currency line
        """
        return TransactionEntryModel(
            transaction_items=[
                self.convert_line_to_item_model(entry.granted_effect),
                self.convert_line_to_item_model(entry.currency_debit),
            ],
            session_id=str(entry.session_id),
            reference_id=str(entry.reference_id),
            offer_id=entry.offer_id,
            time_stamp=entry.timestamp,
            operation_type=int(entry.operation_type),
        )

    def convert_entries_to_list_model(self, entries: List[TransactionEntry]) -> TransactionListModel:
        transactions = [self.convert_entry_to_entry_model(entry) for entry in entries]
        return TransactionListModel(total_results=len(transactions), transactions=transactions)

    def convert_failure_to_client_code(self, failure: ApplyFailure) -> ClientCode:
        return FAILURE_CODES[failure.kind]
