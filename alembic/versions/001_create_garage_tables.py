"""Create garages, garage_opening_hours, vehicles and accessories tables

Revision ID: 001
Revises:
Create Date: 2024-01-01 00:00:00.000000

"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "garages",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("address", sa.String(length=255), nullable=False),
        sa.Column("telephone", sa.String(length=20), nullable=False),
        sa.Column("email", sa.String(length=100), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_garages_email"),
    )
    op.create_index(op.f("ix_garages_name"), "garages", ["name"], unique=False)
    op.create_index(op.f("ix_garages_email"), "garages", ["email"], unique=False)

    op.create_table(
        "garage_opening_hours",
        sa.Column("garage_id", sa.Integer(), nullable=False),
        sa.Column("day_of_week", sa.String(length=20), nullable=False),
        sa.Column("hours", sa.String(length=500), nullable=False),
        sa.ForeignKeyConstraint(["garage_id"], ["garages.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("garage_id", "day_of_week"),
    )

    op.create_table(
        "vehicles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("brand", sa.String(length=50), nullable=False),
        sa.Column("model", sa.String(length=50), nullable=False),
        sa.Column("year_of_manufacture", sa.Integer(), nullable=False),
        sa.Column("fuel_type", sa.String(length=20), nullable=False),
        sa.Column("vin", sa.String(length=17), nullable=True),
        sa.Column("color", sa.String(length=30), nullable=True),
        sa.Column("mileage", sa.Integer(), nullable=True),
        sa.Column("garage_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["garage_id"], ["garages.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("vin", name="uq_vehicles_vin"),
    )
    op.create_index(op.f("ix_vehicles_brand"), "vehicles", ["brand"], unique=False)
    op.create_index(op.f("ix_vehicles_model"), "vehicles", ["model"], unique=False)
    op.create_index(op.f("ix_vehicles_fuel_type"), "vehicles", ["fuel_type"], unique=False)
    op.create_index(op.f("ix_vehicles_garage_id"), "vehicles", ["garage_id"], unique=False)

    op.create_table(
        "accessories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=False),
        sa.Column("price", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("vehicle_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["vehicle_id"], ["vehicles.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_accessories_type"), "accessories", ["type"], unique=False)
    op.create_index(
        op.f("ix_accessories_vehicle_id"), "accessories", ["vehicle_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_accessories_vehicle_id"), table_name="accessories")
    op.drop_index(op.f("ix_accessories_type"), table_name="accessories")
    op.drop_table("accessories")
    op.drop_index(op.f("ix_vehicles_garage_id"), table_name="vehicles")
    op.drop_index(op.f("ix_vehicles_fuel_type"), table_name="vehicles")
    op.drop_index(op.f("ix_vehicles_model"), table_name="vehicles")
    op.drop_index(op.f("ix_vehicles_brand"), table_name="vehicles")
    op.drop_table("vehicles")
    op.drop_table("garage_opening_hours")
    op.drop_index(op.f("ix_garages_email"), table_name="garages")
    op.drop_index(op.f("ix_garages_name"), table_name="garages")
    op.drop_table("garages")
