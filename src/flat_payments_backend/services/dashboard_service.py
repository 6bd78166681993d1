'''
Debt aggregation: how much each flat of a user still has to be paid.
'''
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Any, Optional
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.engine import get_db_session
from ..database import models as db_models
from ..database.utils import store_guard
from ..models import flat as flat_models
from ..models import payment_type as payment_type_models
from ..models import views as view_models
from ..common.logger import get_logger
from ..core import transformers
from .ownership import OwnershipResolver
from .payment_service import PaymentService


class DashboardService:
    """
    Computes debt as the exact Decimal sum of unpaid payment amounts,
    grouped by flat. The whole batch costs one query per table
    (flats, payment types, payments), however many flats there are.
    """
    def __init__(
        self,
        db: Annotated[AsyncSession, Depends(get_db_session)],
        ownership: Annotated[OwnershipResolver, Depends(OwnershipResolver)],
        payment_service: Annotated[PaymentService, Depends(PaymentService)],
        logger: Annotated[logging.Logger, Depends(get_logger)]
    ):
        self.db = db
        self.ownership = ownership
        self.payment_service = payment_service
        self.logger = logger

    async def _debt_by_flat(self, flat_ids: list[UUID]) -> dict[UUID, Decimal]:
        """
        Every requested flat gets an entry, zero when it has no payment
        types or nothing unpaid.
        """
        debt = {flat_id: Decimal("0") for flat_id in flat_ids}

        type_rows = (await self.db.execute(
            select(db_models.PaymentTypes.id, db_models.PaymentTypes.flat_id).filter(
                db_models.PaymentTypes.flat_id.in_(flat_ids)
            )
        )).all()
        if not type_rows:
            return debt

        flat_by_type = {row.id: row.flat_id for row in type_rows}

        payment_rows = (await self.db.execute(
            select(db_models.Payments.payment_type_id, db_models.Payments.amount).filter(
                db_models.Payments.payment_type_id.in_(list(flat_by_type)),
                db_models.Payments.is_paid.is_(False)
            )
        )).all()

        for row in payment_rows:
            debt[flat_by_type[row.payment_type_id]] += Decimal(row.amount)

        return debt

    async def compute_debt(self, user_id: Any) -> list[flat_models.DashboardFlat]:
        """Returns every flat of the user with its debt, newest flat first."""
        user_uuid = self.ownership.validate_user(user_id)

        with store_guard("compute_debt", self.logger):
            result = await self.db.execute(
                select(db_models.Flats).filter(
                    db_models.Flats.user_id == user_uuid
                ).order_by(db_models.Flats.created_at.desc())
            )
            flats = result.scalars().all()
            if not flats:
                return []
            debt_by_flat = await self._debt_by_flat([flat.id for flat in flats])

        return [
            flat_models.DashboardFlat(
                id=flat.id,
                name=flat.name,
                address=flat.address,
                debt=debt_by_flat[flat.id],
                created_at=flat.created_at,
                updated_at=flat.updated_at
            )
            for flat in flats
        ]

    async def get_dashboard(self, user_id: Any) -> flat_models.DashboardRead:
        return flat_models.DashboardRead(flats=await self.compute_debt(user_id))

    async def get_flat_debt(self, flat_id: Any, user_id: Any) -> Decimal:
        flat = await self.ownership.resolve_flat(flat_id, user_id)
        with store_guard("get_flat_debt", self.logger):
            debt_by_flat = await self._debt_by_flat([flat.id])
        return debt_by_flat[flat.id]

    async def get_flat_detail(
        self,
        flat_id: Any,
        user_id: Any,
        now: Optional[datetime] = None
    ) -> view_models.FlatDetailView:
        """The flat page: the flat, its stats, payment types and all payments."""
        flat = await self.ownership.resolve_flat(flat_id, user_id)

        with store_guard("get_flat_detail", self.logger):
            result = await self.db.execute(
                select(db_models.PaymentTypes).filter(
                    db_models.PaymentTypes.flat_id == flat.id
                ).order_by(db_models.PaymentTypes.created_at.desc())
            )
            payment_types = [
                payment_type_models.PaymentTypeRead.model_validate(pt) for pt in result.scalars().all()
            ]

        payments = await self.payment_service.list_payments(flat.id, user_id)

        return transformers.to_flat_detail_view(
            flat_models.FlatRead.model_validate(flat),
            payment_types,
            payments,
            now or datetime.now(timezone.utc)
        )
