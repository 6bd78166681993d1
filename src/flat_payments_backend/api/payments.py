'''
API endpoints for Payments: listing, monthly generation, mark-paid.
'''
from typing import Annotated, Any, Optional
from fastapi import APIRouter, Body, Depends, Query, status

from ..models import payment as payment_models
from ..services.security import get_current_user_id
from ..services.payment_service import PaymentService

class PaymentsAPI:
    """
    A class to encapsulate endpoints for Payments.
    """
    def __init__(self):
        self.router = APIRouter(tags=["Payments"])
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route(
                "/flats/{flat_id}/payments",
                self.list_payments,
                methods=["GET"],
                response_model=list[payment_models.PaymentWithTypeName])
        self.router.add_api_route(
                "/flats/{flat_id}/payments/generate",
                self.generate_payments,
                methods=["POST"],
                status_code=status.HTTP_201_CREATED,
                response_model=payment_models.GeneratePaymentsResult)
        self.router.add_api_route(
                "/payments/{payment_id}/mark-paid",
                self.mark_paid,
                methods=["POST"],
                response_model=payment_models.PaymentRead)

    async def list_payments(
        self,
        flat_id: str,
        user_id: Annotated[str, Depends(get_current_user_id)],
        payment_service: Annotated[PaymentService, Depends(PaymentService)],
        month: Annotated[Optional[str], Query(description="Optional filter for month (1-12)")] = None,
        year: Annotated[Optional[str], Query(description="Optional filter for year (1900-2100)")] = None,
        is_paid: Annotated[Optional[str], Query(description="Optional filter for paid status")] = None
    ) -> Any:
        """
        Retrieves the payments of a flat, latest period first.
        """
        filters = {
            key: value for key, value in
            {"month": month, "year": year, "is_paid": is_paid}.items()
            if value is not None
        }
        return await payment_service.list_payments(flat_id, user_id, filters)

    async def generate_payments(
        self,
        flat_id: str,
        payload: Annotated[dict[str, Any], Body()],
        user_id: Annotated[str, Depends(get_current_user_id)],
        payment_service: Annotated[PaymentService, Depends(PaymentService)]
    ) -> Any:
        """
        Generates one payment per payment type of the flat for a month.
        """
        return await payment_service.generate_payments(flat_id, user_id, payload)

    async def mark_paid(
        self,
        payment_id: str,
        user_id: Annotated[str, Depends(get_current_user_id)],
        payment_service: Annotated[PaymentService, Depends(PaymentService)]
    ) -> Any:
        return await payment_service.mark_paid(payment_id, user_id)

# Instantiate the class and export its router
payments_api = PaymentsAPI()
router = payments_api.router
