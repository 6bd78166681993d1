'''
API endpoint for the dashboard: every flat of the user with its debt.
'''
from typing import Annotated, Any
from fastapi import APIRouter, Depends

from ..models import flat as flat_models
from ..services.security import get_current_user_id
from ..services.dashboard_service import DashboardService

class DashboardAPI:
    """
    A class to encapsulate the endpoint for the Dashboard.
    """
    def __init__(self):
        self.router = APIRouter(
            prefix="/dashboard",
            tags=["Dashboard"]
        )
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route("/", self.get_dashboard, methods=["GET"], response_model=flat_models.DashboardRead)

    async def get_dashboard(
        self,
        user_id: Annotated[str, Depends(get_current_user_id)],
        dashboard_service: Annotated[DashboardService, Depends(DashboardService)]
    ) -> Any:
        """
        Retrieves all flats of the current user with the sum of their
        unpaid payments.
        """
        return await dashboard_service.get_dashboard(user_id)

# Instantiate the class and export its router
dashboard_api = DashboardAPI()
router = dashboard_api.router
