"""Baseline: per-country appointment stores.

Revision ID: 001_baseline
Revises:
Create Date: 2026-10-18

Creates one schema per country (names from COUNTRY_DB_SCHEMAS), each with:
- schedules: bookable slots, reserved once booked
- appointments: confirmed appointments processed by the country worker
"""

import sqlalchemy as sa

from alembic import op
from app.models.db.schemas import CHILE_SCHEMA, PERU_SCHEMA

# revision identifiers, used by Alembic.
revision = "001_baseline"
down_revision = None
branch_labels = None
depends_on = None

COUNTRY_SCHEMAS = (PERU_SCHEMA, CHILE_SCHEMA)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Create the country schemas with their schedules and appointments tables."""
    for schema in COUNTRY_SCHEMAS:
        op.execute(f'CREATE SCHEMA IF NOT EXISTS "{schema}"')

        op.create_table(
            "schedules",
            sa.Column("schedule_id", sa.BigInteger(), primary_key=True, autoincrement=False),
            sa.Column("center_id", sa.Integer(), nullable=False),
            sa.Column("specialty_id", sa.Integer(), nullable=False),
            sa.Column("medic_id", sa.Integer(), nullable=False),
            sa.Column("available_date", sa.DateTime(timezone=True), nullable=False),
            sa.Column("is_reserved", sa.Boolean(), nullable=False, server_default=sa.false()),
            *_timestamps(),
            schema=schema,
        )
        op.create_index("ix_schedules_available_date", "schedules", ["available_date"], schema=schema)
        op.create_index("ix_schedules_is_reserved", "schedules", ["is_reserved"], schema=schema)

        op.create_table(
            "appointments",
            sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
            sa.Column("appointment_id", sa.String(36), nullable=False, unique=True),
            sa.Column("insured_id", sa.String(5), nullable=False),
            sa.Column("schedule_id", sa.BigInteger(), nullable=False),
            sa.Column("country_iso", sa.String(2), nullable=False),
            sa.Column("center_id", sa.Integer(), nullable=False),
            sa.Column("specialty_id", sa.Integer(), nullable=False),
            sa.Column("medic_id", sa.Integer(), nullable=False),
            sa.Column("appointment_date", sa.DateTime(timezone=True), nullable=False),
            sa.Column("status", sa.String(20), nullable=False),
            sa.Column("processed_at", sa.DateTime(timezone=True), nullable=True),
            *_timestamps(),
            schema=schema,
        )
        op.create_index("ix_appointments_insured_id", "appointments", ["insured_id"], schema=schema)
        op.create_index("ix_appointments_schedule_id", "appointments", ["schedule_id"], schema=schema)
        op.create_index("ix_appointments_status", "appointments", ["status"], schema=schema)


def downgrade() -> None:
    """Drop the country tables and schemas."""
    for schema in reversed(COUNTRY_SCHEMAS):
        op.drop_table("appointments", schema=schema)
        op.drop_table("schedules", schema=schema)
        op.execute(f'DROP SCHEMA IF EXISTS "{schema}"')
