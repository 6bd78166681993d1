'''
Ownership resolution for every entity along the chain
Payment -> PaymentType -> Flat -> User.
'''
import logging
from typing import Annotated, Any
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.engine import get_db_session
from ..database import models as db_models
from ..database.utils import store_guard
from ..common.exceptions import NotFoundError
from ..common.logger import get_logger
from .validation import validate_id


class OwnershipResolver:
    """
    Loads an entity and confirms it belongs to the given user.
    An entity owned by someone else is reported exactly like a missing one,
    so callers can never learn that it exists.
    """
    def __init__(
        self,
        db: Annotated[AsyncSession, Depends(get_db_session)],
        logger: Annotated[logging.Logger, Depends(get_logger)]
    ):
        self.db = db
        self.logger = logger

    async def resolve_flat(self, flat_id: Any, user_id: Any) -> db_models.Flats:
        flat_uuid = validate_id(flat_id, "flat ID")
        user_uuid = validate_id(user_id, "user ID")

        with store_guard("resolve_flat", self.logger):
            result = await self.db.execute(
                select(db_models.Flats).filter(db_models.Flats.id == flat_uuid)
            )
            flat = result.scalars().first()

        if flat is None or flat.user_id != user_uuid:
            raise NotFoundError("Flat")
        return flat

    async def resolve_payment_type(self, payment_type_id: Any, user_id: Any) -> db_models.PaymentTypes:
        payment_type_uuid = validate_id(payment_type_id, "payment type ID")
        user_uuid = validate_id(user_id, "user ID")

        with store_guard("resolve_payment_type", self.logger):
            stmt = select(
                db_models.PaymentTypes, db_models.Flats.user_id
            ).join(
                db_models.Flats, db_models.PaymentTypes.flat_id == db_models.Flats.id
            ).filter(db_models.PaymentTypes.id == payment_type_uuid)
            row = (await self.db.execute(stmt)).first()

        if row is None or row.user_id != user_uuid:
            raise NotFoundError("Payment type")
        return row[0]

    async def resolve_payment(self, payment_id: Any, user_id: Any) -> db_models.Payments:
        payment_uuid = validate_id(payment_id, "payment ID")
        user_uuid = validate_id(user_id, "user ID")

        with store_guard("resolve_payment", self.logger):
            stmt = select(
                db_models.Payments, db_models.Flats.user_id
            ).join(
                db_models.PaymentTypes, db_models.Payments.payment_type_id == db_models.PaymentTypes.id
            ).join(
                db_models.Flats, db_models.PaymentTypes.flat_id == db_models.Flats.id
            ).filter(db_models.Payments.id == payment_uuid)
            row = (await self.db.execute(stmt)).first()

        if row is None or row.user_id != user_uuid:
            raise NotFoundError("Payment")
        return row[0]

    def validate_user(self, user_id: Any) -> UUID:
        """For operations scoped only by user (listing, creating flats)."""
        return validate_id(user_id, "user ID")
