"""SQLAlchemy vehicle repository adapter."""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload, selectinload

from app.adapters.outbound.persistence.integrity import flush_or_raise
from app.adapters.outbound.persistence.mapping import vehicle_to_entity
from app.adapters.outbound.persistence.models import AccessoryModel, VehicleModel
from app.adapters.outbound.persistence.paging import paginate, sortable
from app.adapters.outbound.persistence.predicate_translator import to_sql
from app.application.ports.vehicle_repository import VehicleRepository
from app.application.queries.pagination import Page, PageRequest
from app.application.queries.predicates import Equals, Predicate
from app.application.queries.vehicle_specifications import is_eco_friendly
from app.domain.entities.vehicle import Vehicle
from app.domain.exceptions import VehicleNotFoundError
from app.domain.value_objects.fuel_type import FuelType


class SqlAlchemyVehicleRepository(VehicleRepository):
    """SQLAlchemy implementation of vehicle repository bound to one session."""

    SORTABLE_FIELDS = sortable(
        "id",
        "brand",
        "model",
        "year_of_manufacture",
        "fuel_type",
        "vin",
        "color",
        "mileage",
        "created_at",
        "updated_at",
    )

    def __init__(self, session: Session) -> None:
        """
        Initialize repository.

        Args:
            session: Session of the enclosing unit of work
        """
        self._session = session

    def _query(self):
        return self._session.query(VehicleModel).options(
            joinedload(VehicleModel.garage),
            selectinload(VehicleModel.accessories),
        )

    async def find_by_id(self, vehicle_id: int) -> Optional[Vehicle]:
        model = self._query().filter(VehicleModel.id == vehicle_id).first()
        return vehicle_to_entity(model) if model is not None else None

    async def save(self, vehicle: Vehicle) -> Vehicle:
        """
        Insert or update a vehicle (upsert by id).

        The owning garage is only set on insert; updates never move a vehicle.

        Args:
            vehicle: Vehicle entity

        Returns:
            Persisted vehicle entity

        Raises:
            VehicleNotFoundError: If the vehicle to update no longer exists
            DuplicateVinError: If the VIN is taken by another vehicle
        """
        if vehicle.id is None:
            model = VehicleModel(garage_id=vehicle.garage_id)
            self._session.add(model)
        else:
            model = self._session.get(VehicleModel, vehicle.id)
            if model is None:
                raise VehicleNotFoundError(vehicle.id)

        model.brand = vehicle.brand
        model.model = vehicle.model
        model.year_of_manufacture = vehicle.year_of_manufacture
        model.fuel_type = vehicle.fuel_type
        model.vin = vehicle.vin
        model.color = vehicle.color
        model.mileage = vehicle.mileage

        flush_or_raise(self._session)
        return vehicle_to_entity(model)

    async def delete_by_id(self, vehicle_id: int) -> None:
        self._session.query(AccessoryModel).filter(AccessoryModel.vehicle_id == vehicle_id).delete(
            synchronize_session=False
        )
        self._session.query(VehicleModel).filter(VehicleModel.id == vehicle_id).delete(
            synchronize_session=False
        )

    async def exists_by_id(self, vehicle_id: int) -> bool:
        return self._session.query(
            self._session.query(VehicleModel).filter(VehicleModel.id == vehicle_id).exists()
        ).scalar()

    async def find_all(self, predicate: Predicate, page_request: PageRequest) -> Page[Vehicle]:
        query = self._query().filter(to_sql(VehicleModel, predicate))
        return paginate(query, VehicleModel, page_request, self.SORTABLE_FIELDS, vehicle_to_entity)

    async def find_by_garage_id(self, garage_id: int, page_request: PageRequest) -> Page[Vehicle]:
        return await self.find_all(Equals("garage_id", garage_id), page_request)

    async def find_by_brand_ignore_case(
        self, brand: str, page_request: PageRequest
    ) -> Page[Vehicle]:
        return await self.find_all(Equals("brand", brand, ignore_case=True), page_request)

    async def find_by_model_ignore_case(
        self, model: str, page_request: PageRequest
    ) -> Page[Vehicle]:
        return await self.find_all(Equals("model", model, ignore_case=True), page_request)

    async def find_by_brand_and_model_ignore_case(
        self, brand: str, model: str, page_request: PageRequest
    ) -> Page[Vehicle]:
        predicate = Equals("brand", brand, ignore_case=True) & Equals(
            "model", model, ignore_case=True
        )
        return await self.find_all(predicate, page_request)

    async def find_by_fuel_type(
        self, fuel_type: FuelType, page_request: PageRequest
    ) -> Page[Vehicle]:
        return await self.find_all(Equals("fuel_type", fuel_type), page_request)

    async def find_by_vin(self, vin: str) -> Optional[Vehicle]:
        model = self._query().filter(VehicleModel.vin == vin).first()
        return vehicle_to_entity(model) if model is not None else None

    async def count_by_garage_id(self, garage_id: int) -> int:
        return (
            self._session.query(func.count(VehicleModel.id))
            .filter(VehicleModel.garage_id == garage_id)
            .scalar()
        )

    async def exists_by_vin(self, vin: str) -> bool:
        return self._session.query(
            self._session.query(VehicleModel).filter(VehicleModel.vin == vin).exists()
        ).scalar()

    async def find_all_by_model(self, model: str) -> list[Vehicle]:
        rows = (
            self._query()
            .filter(to_sql(VehicleModel, Equals("model", model, ignore_case=True)))
            .order_by(VehicleModel.id)
            .all()
        )
        return [vehicle_to_entity(row) for row in rows]

    async def find_by_garage_id_and_fuel_type(
        self, garage_id: int, fuel_type: FuelType, page_request: PageRequest
    ) -> Page[Vehicle]:
        predicate = Equals("garage_id", garage_id) & Equals("fuel_type", fuel_type)
        return await self.find_all(predicate, page_request)

    async def find_eco_friendly(self, page_request: PageRequest) -> Page[Vehicle]:
        return await self.find_all(is_eco_friendly(), page_request)
