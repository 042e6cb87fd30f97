from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    UniqueConstraint,
)

metadata = MetaData()

residences = Table(
    "residences",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("title", String(255), nullable=False),
    Column("city", String(150)),
    Column("price_per_day", Numeric(12, 2), nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
)

vehicles = Table(
    "vehicles",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("brand", String(100), nullable=False),
    Column("model", String(100), nullable=False),
    Column("price_per_day", Numeric(12, 2), nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
)

offers = Table(
    "offers",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("title", String(255), nullable=False),
    Column("residence_id", String(64), nullable=False, index=True),
    Column("vehicle_id", String(64), nullable=False, index=True),
    Column("price", Numeric(12, 2), nullable=False),
    Column("valid_from", DateTime, nullable=False),
    Column("valid_to", DateTime, nullable=False),
    Column("is_active", Boolean, nullable=False, default=True),
)

bookings = Table(
    "bookings",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("booking_code", String(50), nullable=False, unique=True),
    Column("user_id", String(64)),
    Column("residence_id", String(64)),
    Column("vehicle_id", String(64)),
    Column("offer_id", String(64)),
    Column("start_date", DateTime, nullable=False),
    Column("end_date", DateTime, nullable=False),
    Column("total_price", Numeric(12, 2), nullable=False),
    Column("currency_code", String(3), nullable=False),
    Column("status", String(32), nullable=False),
    Column("notes", String(500)),
    Column("lock_version", Integer, nullable=False, default=0),
    Column("created_at", DateTime),
    Column("updated_at", DateTime),
    Index("ix_bookings_residence_status", "residence_id", "status"),
    Index("ix_bookings_vehicle_status", "vehicle_id", "status"),
    Index("ix_bookings_offer_status", "offer_id", "status"),
    Index("ix_bookings_user_id", "user_id"),
)

idempotency_keys = Table(
    "idempotency_keys",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("scope", String(32), nullable=False),
    Column("idem_key", String(128), nullable=False),
    Column("request_hash", String(64), nullable=False),
    Column("response_json", JSON),
    Column("http_status", Integer),
    Column("reference_booking_code", String(50)),
    UniqueConstraint("scope", "idem_key", name="uq_idempotency_scope_key"),
)
