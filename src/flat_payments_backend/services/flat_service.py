'''
Flat management: listing, reading, creating, updating and deleting the
flats a user owns.
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
from ..models import flat as flat_models
from ..models import views as view_models
from ..common.exceptions import InvalidInputError
from ..common.logger import get_logger
from ..core import transformers
from .ownership import OwnershipResolver
from .validation import validate_command, validate_id


class FlatService:
    """
    Service for all business logic related to flats.
    Every method is scoped to the authenticated user.
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

    # --- Read Methods ---

    async def list_flats(self, user_id: Any) -> list[flat_models.FlatRead]:
        """Returns the user's flats, newest first."""
        user_uuid = self.ownership.validate_user(user_id)
        with store_guard("list_flats", self.logger):
            stmt = select(db_models.Flats).filter(
                db_models.Flats.user_id == user_uuid
            ).order_by(db_models.Flats.created_at.desc())
            result = await self.db.execute(stmt)
            flats = result.scalars().all()
        return [flat_models.FlatRead.model_validate(flat) for flat in flats]

    async def list_flats_view(self, user_id: Any) -> view_models.FlatsListView:
        return transformers.to_flats_list_view(await self.list_flats(user_id))

    async def get_flat(self, flat_id: Any, user_id: Any) -> flat_models.FlatRead:
        flat = await self.ownership.resolve_flat(flat_id, user_id)
        return flat_models.FlatRead.model_validate(flat)

    # --- Write Methods ---

    async def _ensure_user(self, user_uuid: UUID) -> None:
        """
        Users are registered with the external identity provider; the local
        row that flats hang off is created on first use.
        """
        if await self.db.get(db_models.Users, user_uuid) is None:
            self.logger.info(f"Provisioning local user row for {user_uuid}.", extra={"user_id": str(user_uuid)})
            self.db.add(db_models.Users(id=user_uuid))
            await self.db.flush()

    async def create_flat(self, user_id: Any, data: Any) -> flat_models.FlatRead:
        user_uuid = self.ownership.validate_user(user_id)
        command = validate_command(flat_models.FlatCreate, data)

        self.logger.info(f"User {user_uuid} creating flat '{command.name}'.", extra={"user_id": str(user_uuid)})
        with store_guard("create_flat", self.logger):
            await self._ensure_user(user_uuid)
            new_flat = db_models.Flats(
                user_id=user_uuid,
                name=command.name,
                address=command.address
            )
            self.db.add(new_flat)
            await self.db.flush()
            await self.db.refresh(new_flat)

        self.logger.info(f"Flat {new_flat.id} created.", extra={"flat_id": str(new_flat.id)})
        return flat_models.FlatRead.model_validate(new_flat)

    async def update_flat(self, flat_id: Any, user_id: Any, data: Any) -> flat_models.FlatRead:
        validate_id(flat_id, "flat ID")
        self.ownership.validate_user(user_id)
        command = validate_command(flat_models.FlatUpdate, data)
        update_data = command.model_dump(exclude_unset=True, exclude_none=True)
        if not update_data:
            raise InvalidInputError({"__root__": "No fields provided to update."})

        flat = await self.ownership.resolve_flat(flat_id, user_id)

        self.logger.info(f"Updating flat {flat.id}: {sorted(update_data)}", extra={"flat_id": str(flat.id)})
        with store_guard("update_flat", self.logger):
            for key, value in update_data.items():
                setattr(flat, key, value)
            await self.db.flush()
            await self.db.refresh(flat)

        self.logger.info(f"Flat {flat.id} updated.", extra={"flat_id": str(flat.id)})
        return flat_models.FlatRead.model_validate(flat)

    async def delete_flat(self, flat_id: Any, user_id: Any) -> None:
        """
        Deletes a flat. Its payment types and payments go with it through
        the ON DELETE CASCADE foreign keys.
        """
        flat = await self.ownership.resolve_flat(flat_id, user_id)

        self.logger.info(f"Deleting flat {flat.id}.", extra={"flat_id": str(flat.id)})
        with store_guard("delete_flat", self.logger):
            await self.db.delete(flat)
            await self.db.flush()

        self.logger.info(f"Flat {flat.id} deleted.", extra={"flat_id": str(flat.id)})
