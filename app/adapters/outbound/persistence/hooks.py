"""Session hooks enforcing aggregate rules right before a flush.

They run for every SQLAlchemy session, so rows written without going
through the services are checked as well.
"""

from collections import Counter
from decimal import Decimal

from sqlalchemy import event, func
from sqlalchemy.orm import Session

from app.adapters.outbound.persistence.models import AccessoryModel, TimestampMixin, VehicleModel
from app.application.ports.clock import utc_now
from app.domain.entities.garage import MAX_VEHICLES_PER_GARAGE
from app.domain.exceptions import (
    InvalidArgumentError,
    InvalidYearOfManufactureError,
    VehicleQuotaExceededError,
)

CLOCK_INFO_KEY = "clock"


def _touch_timestamps(session: Session, now) -> None:
    for instance in session.new:
        if isinstance(instance, TimestampMixin):
            if instance.created_at is None:
                instance.created_at = now
            instance.updated_at = now
    for instance in session.dirty:
        if isinstance(instance, TimestampMixin):
            instance.updated_at = now


def _check_vehicles(session: Session, now) -> None:
    pending = [
        instance
        for instance in list(session.new) + list(session.dirty)
        if isinstance(instance, VehicleModel)
    ]
    for vehicle in pending:
        if vehicle.year_of_manufacture is not None and vehicle.year_of_manufacture > now.year + 1:
            raise InvalidYearOfManufactureError(vehicle.year_of_manufacture)

    incoming = Counter(
        vehicle.garage_id if vehicle.garage_id is not None else getattr(vehicle.garage, "id", None)
        for vehicle in session.new
        if isinstance(vehicle, VehicleModel)
    )
    for garage_id, added in incoming.items():
        if garage_id is None:
            continue
        with session.no_autoflush:
            stored = (
                session.query(func.count(VehicleModel.id))
                .filter(VehicleModel.garage_id == garage_id)
                .scalar()
            )
        if stored + added > MAX_VEHICLES_PER_GARAGE:
            raise VehicleQuotaExceededError(garage_id, MAX_VEHICLES_PER_GARAGE)


def _check_accessories(session: Session) -> None:
    for instance in list(session.new) + list(session.dirty):
        if isinstance(instance, AccessoryModel) and (
            instance.price is None or Decimal(instance.price) <= 0
        ):
            raise InvalidArgumentError("Le prix doit être supérieur à 0")


@event.listens_for(Session, "before_flush")
def enforce_aggregate_rules(session: Session, flush_context, instances) -> None:
    """
    Maintain timestamps and re-check quota, year and price rules.

    The clock is read from session.info["clock"], falling back to UTC now.
    """
    now = session.info.get(CLOCK_INFO_KEY, utc_now)()
    _touch_timestamps(session, now)
    _check_vehicles(session, now)
    _check_accessories(session)
