'''
Payment type management (the recurring charge templates of a flat).
'''
import logging
from typing import Annotated, Any

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.engine import get_db_session
from ..database import models as db_models
from ..database.utils import store_guard
from ..models import payment_type as payment_type_models
from ..common.exceptions import InvalidInputError
from ..common.logger import get_logger
from .ownership import OwnershipResolver
from .validation import validate_command, validate_id


class PaymentTypeService:
    def __init__(
        self,
        db: Annotated[AsyncSession, Depends(get_db_session)],
        ownership: Annotated[OwnershipResolver, Depends(OwnershipResolver)],
        logger: Annotated[logging.Logger, Depends(get_logger)]
    ):
        self.db = db
        self.ownership = ownership
        self.logger = logger

    async def list_payment_types(self, flat_id: Any, user_id: Any) -> list[payment_type_models.PaymentTypeRead]:
        """Returns the payment types of an owned flat, newest first."""
        flat = await self.ownership.resolve_flat(flat_id, user_id)
        with store_guard("list_payment_types", self.logger):
            stmt = select(db_models.PaymentTypes).filter(
                db_models.PaymentTypes.flat_id == flat.id
            ).order_by(db_models.PaymentTypes.created_at.desc())
            result = await self.db.execute(stmt)
            payment_types = result.scalars().all()
        return [payment_type_models.PaymentTypeRead.model_validate(pt) for pt in payment_types]

    async def create_payment_type(self, flat_id: Any, user_id: Any, data: Any) -> payment_type_models.PaymentTypeRead:
        validate_id(flat_id, "flat ID")
        self.ownership.validate_user(user_id)
        command = validate_command(payment_type_models.PaymentTypeCreate, data)
        flat = await self.ownership.resolve_flat(flat_id, user_id)

        self.logger.info(f"Creating payment type '{command.name}' for flat {flat.id}.", extra={"flat_id": str(flat.id)})
        with store_guard("create_payment_type", self.logger):
            new_payment_type = db_models.PaymentTypes(
                flat_id=flat.id,
                name=command.name,
                base_amount=command.base_amount
            )
            self.db.add(new_payment_type)
            await self.db.flush()
            await self.db.refresh(new_payment_type)

        self.logger.info(f"Payment type {new_payment_type.id} created.", extra={"payment_type_id": str(new_payment_type.id)})
        return payment_type_models.PaymentTypeRead.model_validate(new_payment_type)

    async def update_payment_type(self, payment_type_id: Any, user_id: Any, data: Any) -> payment_type_models.PaymentTypeRead:
        """
        Updates name and/or base amount. Payments generated earlier keep
        the amount they were generated with.
        """
        validate_id(payment_type_id, "payment type ID")
        self.ownership.validate_user(user_id)
        command = validate_command(payment_type_models.PaymentTypeUpdate, data)
        update_data = command.model_dump(exclude_unset=True, exclude_none=True)
        if not update_data:
            raise InvalidInputError({"__root__": "No fields provided to update."})

        payment_type = await self.ownership.resolve_payment_type(payment_type_id, user_id)

        self.logger.info(f"Updating payment type {payment_type.id}: {sorted(update_data)}", extra={"payment_type_id": str(payment_type.id)})
        with store_guard("update_payment_type", self.logger):
            for key, value in update_data.items():
                setattr(payment_type, key, value)
            await self.db.flush()
            await self.db.refresh(payment_type)

        self.logger.info(f"Payment type {payment_type.id} updated.", extra={"payment_type_id": str(payment_type.id)})
        return payment_type_models.PaymentTypeRead.model_validate(payment_type)
