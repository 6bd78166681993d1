'''
API endpoints for managing Payment Types.
'''
from typing import Annotated, Any
from fastapi import APIRouter, Body, Depends, status

from ..models import payment_type as payment_type_models
from ..services.security import get_current_user_id
from ..services.payment_type_service import PaymentTypeService

class PaymentTypesAPI:
    """
    A class to encapsulate endpoints for Payment Types.
    """
    def __init__(self):
        self.router = APIRouter(tags=["Payment Types"])
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route(
                "/flats/{flat_id}/payment-types",
                self.list_payment_types,
                methods=["GET"],
                response_model=list[payment_type_models.PaymentTypeRead])
        self.router.add_api_route(
                "/flats/{flat_id}/payment-types",
                self.create_payment_type,
                methods=["POST"],
                status_code=status.HTTP_201_CREATED,
                response_model=payment_type_models.PaymentTypeRead)
        self.router.add_api_route(
                "/payment-types/{payment_type_id}",
                self.update_payment_type,
                methods=["PUT"],
                response_model=payment_type_models.PaymentTypeRead)

    async def list_payment_types(
        self,
        flat_id: str,
        user_id: Annotated[str, Depends(get_current_user_id)],
        payment_type_service: Annotated[PaymentTypeService, Depends(PaymentTypeService)]
    ) -> Any:
        return await payment_type_service.list_payment_types(flat_id, user_id)

    async def create_payment_type(
        self,
        flat_id: str,
        payload: Annotated[dict[str, Any], Body()],
        user_id: Annotated[str, Depends(get_current_user_id)],
        payment_type_service: Annotated[PaymentTypeService, Depends(PaymentTypeService)]
    ) -> Any:
        return await payment_type_service.create_payment_type(flat_id, user_id, payload)

    async def update_payment_type(
        self,
        payment_type_id: str,
        payload: Annotated[dict[str, Any], Body()],
        user_id: Annotated[str, Depends(get_current_user_id)],
        payment_type_service: Annotated[PaymentTypeService, Depends(PaymentTypeService)]
    ) -> Any:
        """
        Updates a payment type. Already generated payments keep their amount.
        """
        return await payment_type_service.update_payment_type(payment_type_id, user_id, payload)

# Instantiate the class and export its router
payment_types_api = PaymentTypesAPI()
router = payment_types_api.router
