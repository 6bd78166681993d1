'''
Payments: listing, monthly generation from payment types, and the
unpaid -> paid transition.
'''
import logging
from datetime import datetime, timezone
from typing import Annotated, Any, Optional
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.engine import get_db_session
from ..database import models as db_models
from ..database.utils import store_guard
from ..models import payment as payment_models
from ..common.exceptions import AlreadyPaidError, ConflictError, NoPaymentTypesError, StoreFailureError
from ..common.logger import get_logger
from .ownership import OwnershipResolver
from .validation import validate_command, validate_id


class PaymentService:
    """
    Service for creating, reading and paying monthly payments.
    Ownership of every flat and payment is checked through OwnershipResolver.
    """
    def __init__(
        self,
        db: Annotated[AsyncSession, Depends(get_db_session)],
        ownership: Annotated[OwnershipResolver, Depends(OwnershipResolver)],
        logger: Annotated[logging.Logger, Depends(get_logger)]
    ):
        self.db = db
        self.ownership = ownership
        self.logger = logger

    # --- 1. Internal Data-Fetching (No Auth) ---

    async def _get_payment_types(self, flat_id: UUID) -> list[db_models.PaymentTypes]:
        stmt = select(db_models.PaymentTypes).filter(
            db_models.PaymentTypes.flat_id == flat_id
        ).order_by(db_models.PaymentTypes.created_at.desc())
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _get_existing_payment_ids(
        self,
        payment_type_ids: list[UUID],
        month: int,
        year: int
    ) -> dict[UUID, UUID]:
        """Maps payment_type_id -> payment_id for payments already in the period."""
        stmt = select(
            db_models.Payments.payment_type_id, db_models.Payments.id
        ).filter(
            db_models.Payments.payment_type_id.in_(payment_type_ids),
            db_models.Payments.month == month,
            db_models.Payments.year == year
        )
        result = await self.db.execute(stmt)
        return {row.payment_type_id: row.id for row in result.all()}

    @staticmethod
    def _with_type_name(payment: db_models.Payments, type_name: str) -> payment_models.PaymentWithTypeName:
        base = payment_models.PaymentRead.model_validate(payment)
        return payment_models.PaymentWithTypeName(**base.model_dump(), payment_type_name=type_name)

    @staticmethod
    def _skipped_entries(
        type_names: dict[UUID, str],
        existing: dict[UUID, UUID]
    ) -> list[payment_models.SkippedPayment]:
        return [
            payment_models.SkippedPayment(
                payment_type_id=type_id,
                payment_type_name=name,
                existing_payment_id=existing[type_id]
            )
            for type_id, name in type_names.items() if type_id in existing
        ]

    # --- 2. Read Methods ---

    async def list_payments(
        self,
        flat_id: Any,
        user_id: Any,
        filters: Optional[Any] = None
    ) -> list[payment_models.PaymentWithTypeName]:
        """
        Returns the payments of an owned flat joined with their payment type
        names, latest period first. Filters are optional.
        """
        validate_id(flat_id, "flat ID")
        self.ownership.validate_user(user_id)
        parsed = validate_command(payment_models.PaymentFilters, filters or {})
        flat = await self.ownership.resolve_flat(flat_id, user_id)

        stmt = select(
            db_models.Payments, db_models.PaymentTypes.name
        ).join(
            db_models.PaymentTypes, db_models.Payments.payment_type_id == db_models.PaymentTypes.id
        ).filter(db_models.PaymentTypes.flat_id == flat.id)

        if parsed.month is not None:
            stmt = stmt.filter(db_models.Payments.month == parsed.month)
        if parsed.year is not None:
            stmt = stmt.filter(db_models.Payments.year == parsed.year)
        if parsed.is_paid is not None:
            stmt = stmt.filter(db_models.Payments.is_paid == parsed.is_paid)

        stmt = stmt.order_by(
            db_models.Payments.year.desc(),
            db_models.Payments.month.desc(),
            db_models.Payments.created_at.desc()
        )

        with store_guard("list_payments", self.logger):
            rows = (await self.db.execute(stmt)).all()
        return [self._with_type_name(payment, name) for payment, name in rows]

    # --- 3. Generation ---

    async def generate_payments(self, flat_id: Any, user_id: Any, data: Any) -> payment_models.GeneratePaymentsResult:
        """
        Creates one unpaid payment per payment type of the flat for the
        requested period, each with the type's current base amount.

        Payment types that already have a payment for the period are
        skipped and reported. If all of them are taken, ConflictError is
        raised. The new rows are flushed as one batch; if the unique
        (payment_type_id, month, year) constraint still fires (a concurrent
        generation won the race) the whole batch is rolled back and the
        conflicting types are reported.
        """
        validate_id(flat_id, "flat ID")
        self.ownership.validate_user(user_id)
        command = validate_command(payment_models.GeneratePayments, data)
        flat = await self.ownership.resolve_flat(flat_id, user_id)
        # Plain values only from here on: a rollback expires every ORM object.
        flat_uuid = flat.id
        period = f"{command.month}/{command.year}"

        self.logger.info(
            f"Generating payments for flat {flat_uuid} ({period}).",
            extra={"flat_id": str(flat_uuid), "month": command.month, "year": command.year}
        )

        with store_guard("generate_payments", self.logger):
            payment_types = await self._get_payment_types(flat_uuid)
            if not payment_types:
                self.logger.warning(f"Flat {flat_uuid} has no payment types, nothing to generate.")
                raise NoPaymentTypesError(flat_uuid)

            type_names = {pt.id: pt.name for pt in payment_types}
            existing = await self._get_existing_payment_ids(list(type_names), command.month, command.year)
            skipped = self._skipped_entries(type_names, existing)
            to_create = {
                type_id: name for type_id, name in type_names.items() if type_id not in existing
            }

            if not to_create:
                self.logger.warning(f"All payments for flat {flat_uuid} ({period}) already exist.")
                raise ConflictError(
                    "Payments for this period already exist.",
                    conflicts=[entry.model_dump() for entry in skipped]
                )

            new_payments = [
                db_models.Payments(
                    payment_type_id=pt.id,
                    amount=pt.base_amount,
                    month=command.month,
                    year=command.year,
                    is_paid=False,
                    paid_at=None
                )
                for pt in payment_types if pt.id in to_create
            ]

            try:
                self.db.add_all(new_payments)
                await self.db.flush()
            except IntegrityError as e:
                await self.db.rollback()
                existing = await self._get_existing_payment_ids(list(to_create), command.month, command.year)
                conflicts = self._skipped_entries(to_create, existing)

                # Not a duplicate period: a foreign key or check constraint failed.
                if not conflicts:
                    self.logger.error(
                        f"Batch insert for flat {flat_uuid} ({period}) violated a constraint: {e}",
                        exc_info=True,
                        extra={"flat_id": str(flat_uuid), "operation": "generate_payments"}
                    )
                    raise StoreFailureError("generate_payments") from e

                self.logger.warning(
                    f"Concurrent generation detected for flat {flat_uuid} ({period}); batch rolled back.",
                    extra={"flat_id": str(flat_uuid)}
                )
                raise ConflictError(
                    "Payments for this period were generated concurrently. Nothing was created.",
                    conflicts=[entry.model_dump() for entry in conflicts]
                ) from e

        generated = [self._with_type_name(p, to_create[p.payment_type_id]) for p in new_payments]

        message = "Payments generated successfully"
        if skipped:
            message = f"Payments generated; {len(skipped)} already existed and were skipped"

        self.logger.info(
            f"Generated {len(generated)} payments for flat {flat_uuid}, skipped {len(skipped)}.",
            extra={"flat_id": str(flat_uuid), "generated": len(generated), "skipped": len(skipped)}
        )
        return payment_models.GeneratePaymentsResult(
            message=message,
            generated_count=len(generated),
            month=command.month,
            year=command.year,
            payments=generated,
            skipped=skipped
        )

    # --- 4. Lifecycle ---

    async def mark_paid(self, payment_id: Any, user_id: Any) -> payment_models.PaymentRead:
        """
        Unpaid -> Paid, stamping paid_at. There is no way back, and a paid
        payment is never re-stamped.
        """
        payment = await self.ownership.resolve_payment(payment_id, user_id)
        if payment.is_paid:
            raise AlreadyPaidError(payment.id)

        self.logger.info(f"Marking payment {payment.id} as paid.", extra={"payment_id": str(payment.id)})
        with store_guard("mark_paid", self.logger):
            stmt = update(db_models.Payments).where(
                db_models.Payments.id == payment.id,
                db_models.Payments.is_paid.is_(False)
            ).values(
                is_paid=True,
                paid_at=datetime.now(timezone.utc)
            ).execution_options(synchronize_session=False)
            result = await self.db.execute(stmt)

            # Someone else paid it between our read and our update.
            if result.rowcount == 0:
                raise AlreadyPaidError(payment.id)

            await self.db.refresh(payment)

        self.logger.info(f"Payment {payment.id} marked as paid.", extra={"payment_id": str(payment.id)})
        return payment_models.PaymentRead.model_validate(payment)
