'''
API endpoints for managing Flats.
'''
from typing import Annotated, Any
from fastapi import APIRouter, Body, Depends, status

from ..models import flat as flat_models
from ..models import views as view_models
from ..services.security import get_current_user_id
from ..services.flat_service import FlatService
from ..services.dashboard_service import DashboardService

class FlatsAPI:
    """
    A class to encapsulate endpoints for Flats.
    Path ids are taken as plain strings; the services validate them.
    """
    def __init__(self):
        self.router = APIRouter(
            prefix="/flats",
            tags=["Flats"]
        )
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route(
                "/",
                self.list_flats,
                methods=["GET"],
                response_model=view_models.FlatsListView)
        self.router.add_api_route(
                "/",
                self.create_flat,
                methods=["POST"],
                status_code=status.HTTP_201_CREATED,
                response_model=flat_models.FlatRead)
        self.router.add_api_route(
                "/{flat_id}",
                self.get_flat,
                methods=["GET"],
                response_model=flat_models.FlatRead)
        self.router.add_api_route(
                "/{flat_id}",
                self.update_flat,
                methods=["PUT"],
                response_model=flat_models.FlatRead)
        self.router.add_api_route(
                "/{flat_id}",
                self.delete_flat,
                methods=["DELETE"])
        self.router.add_api_route(
                "/{flat_id}/detail",
                self.get_flat_detail,
                methods=["GET"],
                response_model=view_models.FlatDetailView)

    async def list_flats(
        self,
        user_id: Annotated[str, Depends(get_current_user_id)],
        flat_service: Annotated[FlatService, Depends(FlatService)]
    ) -> Any:
        """
        Retrieves the current user's flats as list cards.
        """
        return await flat_service.list_flats_view(user_id)

    async def create_flat(
        self,
        payload: Annotated[dict[str, Any], Body()],
        user_id: Annotated[str, Depends(get_current_user_id)],
        flat_service: Annotated[FlatService, Depends(FlatService)]
    ) -> Any:
        return await flat_service.create_flat(user_id, payload)

    async def get_flat(
        self,
        flat_id: str,
        user_id: Annotated[str, Depends(get_current_user_id)],
        flat_service: Annotated[FlatService, Depends(FlatService)]
    ) -> Any:
        return await flat_service.get_flat(flat_id, user_id)

    async def update_flat(
        self,
        flat_id: str,
        payload: Annotated[dict[str, Any], Body()],
        user_id: Annotated[str, Depends(get_current_user_id)],
        flat_service: Annotated[FlatService, Depends(FlatService)]
    ) -> Any:
        return await flat_service.update_flat(flat_id, user_id, payload)

    async def delete_flat(
        self,
        flat_id: str,
        user_id: Annotated[str, Depends(get_current_user_id)],
        flat_service: Annotated[FlatService, Depends(FlatService)]
    ):
        """
        Deletes a flat together with its payment types and payments.
        """
        await flat_service.delete_flat(flat_id, user_id)
        return {"message": "Flat deleted successfully"}

    async def get_flat_detail(
        self,
        flat_id: str,
        user_id: Annotated[str, Depends(get_current_user_id)],
        dashboard_service: Annotated[DashboardService, Depends(DashboardService)]
    ) -> Any:
        """
        The flat page: stats, payment types and payments with overdue flags.
        """
        return await dashboard_service.get_flat_detail(flat_id, user_id)

# Instantiate the class and export its router
flats_api = FlatsAPI()
router = flats_api.router
