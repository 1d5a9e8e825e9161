import logging

from fastapi import APIRouter, Depends, Request

from shop_server.catalog import OfferCatalog
from shop_server.converter import DataConverter
from shop_server.domain.failures import ApplyFailure
from shop_server.load_secrets import user_id_header
from shop_server.models.dc_models import ApplyOfferListModel, ClientCode
from shop_server.services.offer_service import OfferApplicationService

user_service_router = APIRouter(prefix="/UserService.svc")
data_converter = DataConverter()


def extract_user_id(request: Request) -> int | None:
    """Read the caller's user id from the request headers

    Args:
        request (Request): Incoming request

    Returns:
        int | None: User id, None when the header is missing or not an integer
    """
    raw_user_id = request.headers.get(user_id_header)
    if raw_user_id is None:
        return None
    try:
        return int(raw_user_id)
    except ValueError:
        logging.warning(f"Ignoring non-integer user id header: {raw_user_id!r}")
        return None


def get_offer_service(request: Request) -> OfferApplicationService:
    return request.app.state.offer_service


def get_offer_catalog(request: Request) -> OfferCatalog:
    return request.app.state.offer_catalog


def transaction_list_result(result_name: str, result) -> dict:
    """Wrap entries or a failure in the client's result envelope."""
    if isinstance(result, ApplyFailure):
        return {
            result_name: {
                "retCode": int(data_converter.convert_failure_to_client_code(result)),
                "errorMessage": result.message,
                "data": {"totalResults": 0, "transactions": []},
            }
        }
    transaction_list = data_converter.convert_entries_to_list_model(result)
    return {
        result_name: {
            "retCode": int(ClientCode.success),
            "data": transaction_list.model_dump(by_alias=True),
        }
    }


class UserServiceAPI:
    @staticmethod
    @user_service_router.post("/ApplyOfferListAndGetTransactionHistory")
    async def apply_offer_list_and_get_transaction_history(
        offer_request: ApplyOfferListModel,
        user_id: int | None = Depends(extract_user_id),
        offer_service: OfferApplicationService = Depends(get_offer_service),
    ) -> dict:
        result = await offer_service.apply(
            user_id, offer_request.offer_ids, offer_request.history_from_time
        )
        return transaction_list_result("ApplyOfferListAndGetTransactionHistory", result)

    @staticmethod
    @user_service_router.post("/GetTransactionHistory")
    async def get_transaction_history(
        user_id: int | None = Depends(extract_user_id),
        offer_service: OfferApplicationService = Depends(get_offer_service),
    ) -> dict:
        result = await offer_service.get_transaction_history(user_id)
        return transaction_list_result("GetTransactionHistoryResult", result)

    @staticmethod
    @user_service_router.post("/GetItemOffers")
    async def get_item_offers(
        offer_catalog: OfferCatalog = Depends(get_offer_catalog),
    ) -> dict:
        return {
            "GetItemOffersResult": {
                "retCode": int(ClientCode.success),
                "data": offer_catalog.item_offers,
            }
        }
