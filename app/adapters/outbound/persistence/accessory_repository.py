"""SQLAlchemy accessory repository adapter."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.adapters.outbound.persistence.integrity import flush_or_raise
from app.adapters.outbound.persistence.mapping import accessory_to_entity
from app.adapters.outbound.persistence.models import AccessoryModel, VehicleModel
from app.adapters.outbound.persistence.paging import paginate, sortable
from app.adapters.outbound.persistence.predicate_translator import to_sql
from app.application.ports.accessory_repository import AccessoryRepository
from app.application.queries.pagination import Page, PageRequest
from app.application.queries.predicates import Contains
from app.domain.entities.accessory import Accessory
from app.domain.exceptions import AccessoryNotFoundError
from app.domain.value_objects.accessory_type import AccessoryType

_CENTS = Decimal("0.01")


class SqlAlchemyAccessoryRepository(AccessoryRepository):
    """SQLAlchemy implementation of accessory repository bound to one session."""

    SORTABLE_FIELDS = sortable("id", "name", "price", "type", "created_at", "updated_at")

    def __init__(self, session: Session) -> None:
        """
        Initialize repository.

        Args:
            session: Session of the enclosing unit of work
        """
        self._session = session

    def _query(self):
        return self._session.query(AccessoryModel).options(joinedload(AccessoryModel.vehicle))

    def _page(self, query, page_request: PageRequest) -> Page[Accessory]:
        return paginate(
            query, AccessoryModel, page_request, self.SORTABLE_FIELDS, accessory_to_entity
        )

    async def find_by_id(self, accessory_id: int) -> Optional[Accessory]:
        model = self._query().filter(AccessoryModel.id == accessory_id).first()
        return accessory_to_entity(model) if model is not None else None

    async def save(self, accessory: Accessory) -> Accessory:
        """
        Insert or update an accessory (upsert by id).

        Args:
            accessory: Accessory entity

        Returns:
            Persisted accessory entity

        Raises:
            AccessoryNotFoundError: If the accessory to update no longer exists
        """
        if accessory.id is None:
            model = AccessoryModel(vehicle_id=accessory.vehicle_id)
            self._session.add(model)
        else:
            model = self._session.get(AccessoryModel, accessory.id)
            if model is None:
                raise AccessoryNotFoundError(accessory.id)

        model.name = accessory.name
        model.description = accessory.description
        model.price = accessory.price
        model.type = accessory.type

        flush_or_raise(self._session)
        return accessory_to_entity(model, accessory.vehicle_display_name)

    async def delete_by_id(self, accessory_id: int) -> None:
        self._session.query(AccessoryModel).filter(AccessoryModel.id == accessory_id).delete(
            synchronize_session=False
        )

    async def exists_by_id(self, accessory_id: int) -> bool:
        return self._session.query(
            self._session.query(AccessoryModel).filter(AccessoryModel.id == accessory_id).exists()
        ).scalar()

    async def find_by_vehicle_id(
        self, vehicle_id: int, page_request: PageRequest
    ) -> Page[Accessory]:
        return self._page(
            self._query().filter(AccessoryModel.vehicle_id == vehicle_id), page_request
        )

    async def list_by_vehicle_id(self, vehicle_id: int) -> list[Accessory]:
        rows = (
            self._query()
            .filter(AccessoryModel.vehicle_id == vehicle_id)
            .order_by(AccessoryModel.id)
            .all()
        )
        return [accessory_to_entity(row) for row in rows]

    async def find_by_type(
        self, accessory_type: AccessoryType, page_request: PageRequest
    ) -> Page[Accessory]:
        return self._page(self._query().filter(AccessoryModel.type == accessory_type), page_request)

    async def find_by_name_containing_ignore_case(
        self, name: str, page_request: PageRequest
    ) -> Page[Accessory]:
        return self._page(
            self._query().filter(to_sql(AccessoryModel, Contains("name", name))), page_request
        )

    async def find_by_price_between(
        self, min_price: Decimal, max_price: Decimal, page_request: PageRequest
    ) -> Page[Accessory]:
        return self._page(
            self._query().filter(AccessoryModel.price.between(min_price, max_price)),
            page_request,
        )

    async def count_by_vehicle_id(self, vehicle_id: int) -> int:
        return (
            self._session.query(func.count(AccessoryModel.id))
            .filter(AccessoryModel.vehicle_id == vehicle_id)
            .scalar()
        )

    async def find_by_vehicle_id_and_type(
        self, vehicle_id: int, accessory_type: AccessoryType
    ) -> list[Accessory]:
        rows = (
            self._query()
            .filter(AccessoryModel.vehicle_id == vehicle_id, AccessoryModel.type == accessory_type)
            .order_by(AccessoryModel.id)
            .all()
        )
        return [accessory_to_entity(row) for row in rows]

    async def find_top_expensive(self, limit: int) -> list[Accessory]:
        rows = (
            self._query()
            .order_by(AccessoryModel.price.desc(), AccessoryModel.id.asc())
            .limit(limit)
            .all()
        )
        return [accessory_to_entity(row) for row in rows]

    async def sum_price_by_vehicle_id(self, vehicle_id: int) -> Decimal:
        total = (
            self._session.query(func.coalesce(func.sum(AccessoryModel.price), 0))
            .filter(AccessoryModel.vehicle_id == vehicle_id)
            .scalar()
        )
        return Decimal(str(total)).quantize(_CENTS)

    async def find_garage_ids_with_accessory_type(
        self, accessory_type: AccessoryType
    ) -> list[int]:
        rows = (
            self._session.query(VehicleModel.garage_id)
            .join(VehicleModel.accessories)
            .filter(AccessoryModel.type == accessory_type)
            .distinct()
            .order_by(VehicleModel.garage_id)
            .all()
        )
        return [row[0] for row in rows]
