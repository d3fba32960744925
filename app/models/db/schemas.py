"""PostgreSQL schema names for the per-country stores.

Each country keeps its ``appointments`` and ``schedules`` tables in its own
schema, configured through ``COUNTRY_DB_SCHEMAS``:
- PE: appointments_pe by default
- CL: appointments_cl by default
"""

from app.config.settings import get_settings

_schemas = get_settings().COUNTRY_DB_SCHEMAS

# Peru country store
PERU_SCHEMA = _schemas["PE"]

# Chile country store
CHILE_SCHEMA = _schemas["CL"]

# Alembic version table lives outside the country schemas
VERSION_TABLE_SCHEMA = "public"

# All managed schemas (for Alembic configuration)
MANAGED_SCHEMAS = frozenset({PERU_SCHEMA, CHILE_SCHEMA})
