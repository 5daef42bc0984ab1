"""SQLAlchemy garage repository adapter."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from app.adapters.outbound.persistence.integrity import flush_or_raise
from app.adapters.outbound.persistence.mapping import garage_to_entity
from app.adapters.outbound.persistence.models import (
    AccessoryModel,
    GarageModel,
    GarageOpeningHoursModel,
    VehicleModel,
)
from app.adapters.outbound.persistence.paging import paginate, sortable
from app.adapters.outbound.persistence.predicate_translator import to_sql
from app.application.ports.garage_repository import GarageRepository
from app.application.queries.garage_specifications import (
    has_available_capacity,
    has_vehicles,
    is_full,
)
from app.application.queries.pagination import Page, PageRequest
from app.application.queries.predicates import Contains, Predicate
from app.domain.entities.garage import MAX_VEHICLES_PER_GARAGE, Garage, normalize_email
from app.domain.exceptions import GarageNotFoundError
from app.domain.value_objects.day_of_week import DayOfWeek


class SqlAlchemyGarageRepository(GarageRepository):
    """SQLAlchemy implementation of garage repository bound to one session."""

    SORTABLE_FIELDS = sortable(
        "id", "name", "address", "telephone", "email", "created_at", "updated_at"
    )

    def __init__(self, session: Session) -> None:
        """
        Initialize repository.

        Args:
            session: Session of the enclosing unit of work
        """
        self._session = session

    def _query(self):
        return self._session.query(GarageModel).options(
            selectinload(GarageModel.opening_hours),
            selectinload(GarageModel.vehicles).selectinload(VehicleModel.accessories),
        )

    def _sync_opening_hours(self, model: GarageModel, opening_hours: dict) -> None:
        existing = {row.day_of_week: row for row in model.opening_hours}
        for day, hours in opening_hours.items():
            day = DayOfWeek(day)
            if day in existing:
                existing[day].hours = hours
            else:
                model.opening_hours.append(GarageOpeningHoursModel(day_of_week=day, hours=hours))
        for day, row in existing.items():
            if day not in opening_hours:
                model.opening_hours.remove(row)

    async def find_by_id(self, garage_id: int) -> Optional[Garage]:
        model = self._query().filter(GarageModel.id == garage_id).first()
        return garage_to_entity(model) if model is not None else None

    async def find_by_id_for_update(self, garage_id: int) -> Optional[Garage]:
        model = self._query().filter(GarageModel.id == garage_id).with_for_update().first()
        return garage_to_entity(model) if model is not None else None

    async def save(self, garage: Garage) -> Garage:
        """
        Insert or update a garage (upsert by id).

        Args:
            garage: Garage entity

        Returns:
            Persisted garage entity

        Raises:
            GarageNotFoundError: If the garage to update no longer exists
            DuplicateEmailError: If the email is taken by another garage
        """
        if garage.id is None:
            model = GarageModel()
            self._session.add(model)
        else:
            model = self._session.get(GarageModel, garage.id)
            if model is None:
                raise GarageNotFoundError(garage.id)

        model.name = garage.name
        model.address = garage.address
        model.telephone = garage.telephone
        model.email = normalize_email(garage.email)
        self._sync_opening_hours(model, garage.opening_hours)

        flush_or_raise(self._session)
        return garage_to_entity(model)

    async def delete_by_id(self, garage_id: int) -> None:
        """
        Delete a garage, cascading explicitly to accessories, vehicles and opening hours.

        Args:
            garage_id: Garage identifier
        """
        vehicle_ids = select(VehicleModel.id).where(VehicleModel.garage_id == garage_id)
        self._session.query(AccessoryModel).filter(
            AccessoryModel.vehicle_id.in_(vehicle_ids)
        ).delete(synchronize_session=False)
        self._session.query(VehicleModel).filter(VehicleModel.garage_id == garage_id).delete(
            synchronize_session=False
        )
        self._session.query(GarageOpeningHoursModel).filter(
            GarageOpeningHoursModel.garage_id == garage_id
        ).delete(synchronize_session=False)
        self._session.query(GarageModel).filter(GarageModel.id == garage_id).delete(
            synchronize_session=False
        )

    async def exists_by_id(self, garage_id: int) -> bool:
        return self._session.query(
            self._session.query(GarageModel).filter(GarageModel.id == garage_id).exists()
        ).scalar()

    async def find_all(self, predicate: Predicate, page_request: PageRequest) -> Page[Garage]:
        query = self._query().filter(to_sql(GarageModel, predicate))
        return paginate(query, GarageModel, page_request, self.SORTABLE_FIELDS, garage_to_entity)

    async def find_by_email(self, email: str) -> Optional[Garage]:
        model = self._query().filter(GarageModel.email == normalize_email(email)).first()
        return garage_to_entity(model) if model is not None else None

    async def exists_by_email(self, email: str) -> bool:
        return self._session.query(
            self._session.query(GarageModel)
            .filter(GarageModel.email == normalize_email(email))
            .exists()
        ).scalar()

    async def find_by_name_containing_ignore_case(
        self, name: str, page_request: PageRequest
    ) -> Page[Garage]:
        return await self.find_all(Contains("name", name), page_request)

    async def find_by_address_containing_ignore_case(
        self, address: str, page_request: PageRequest
    ) -> Page[Garage]:
        return await self.find_all(Contains("address", address), page_request)

    async def find_with_available_capacity(
        self, page_request: PageRequest, max_vehicles: int = MAX_VEHICLES_PER_GARAGE
    ) -> Page[Garage]:
        return await self.find_all(has_available_capacity(max_vehicles), page_request)

    async def find_full(
        self, page_request: PageRequest, max_vehicles: int = MAX_VEHICLES_PER_GARAGE
    ) -> Page[Garage]:
        return await self.find_all(is_full(max_vehicles), page_request)

    async def count_with_at_least_one_vehicle(self) -> int:
        return (
            self._session.query(func.count(GarageModel.id))
            .filter(to_sql(GarageModel, has_vehicles()))
            .scalar()
        )
