from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    Date,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
    UniqueConstraint,
)

from experiencias_api.infrastructure.db.types import UTCDateTime

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255)),
    Column("user_type", String(16), nullable=False, default="GUEST"),
    Column("verified", Boolean, nullable=False, default=False),
)

experiences = Table(
    "experiences",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("price", Numeric(12, 2), nullable=False),
    Column("active", Boolean, nullable=False, default=True),
)

reservation_groups = Table(
    "reservation_groups",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(36), nullable=False, index=True),
    Column("notes", Text),
    Column("active", Boolean, nullable=False, default=True),
    Column("receipt_id", String(36)),
    Column("created_at", UTCDateTime),
)

reservations = Table(
    "reservations",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("reservation_group_id", String(36), nullable=False, index=True),
    Column("user_id", String(36), nullable=False),
    Column("experience_id", String(36), nullable=False),
    Column("start_date", UTCDateTime, nullable=False),
    Column("end_date", UTCDateTime, nullable=False),
    Column("price", Numeric(12, 2), nullable=False),
    Column("members_count", Integer, nullable=False),
    Column("active", Boolean, nullable=False, default=True),
)

members = Table(
    "members",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("reservation_group_id", String(36), nullable=False, index=True),
    Column("name", String(255), nullable=False),
    Column("document", String(64)),
    Column("gender", String(32)),
    Column("phone", String(50)),
    Column("birth_date", Date),
    Column("active", Boolean, nullable=False, default=True),
)

# Ledger append-only: nunca UPDATE ni DELETE sobre esta tabla.
requests = Table(
    "requests",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("type", String(32), nullable=False),
    Column("description", Text),
    Column("file_url", String(500)),
    Column("created_by_user_id", String(36), nullable=False),
    Column("created_at", UTCDateTime, nullable=False),
    Column("sequence", Integer, nullable=False),
    Column("reservation_group_id", String(36), index=True),
    Column("professor_id", String(36), index=True),
    UniqueConstraint("reservation_group_id", "sequence", name="uq_requests_group_sequence"),
    UniqueConstraint("professor_id", "sequence", name="uq_requests_professor_sequence"),
    CheckConstraint(
        "(reservation_group_id IS NULL) <> (professor_id IS NULL)",
        name="ck_requests_single_subject",
    ),
)

receipts = Table(
    "receipts",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("type", String(16), nullable=False),
    Column("url", String(500), nullable=False),
    Column("value", Numeric(12, 2)),
    Column("status", String(16), nullable=False),
    Column("user_id", String(36), nullable=False, index=True),
    Column("reservation_group_id", String(36)),
    Column("created_at", UTCDateTime),
)

subject_status = Table(
    "subject_status",
    metadata,
    Column("subject_kind", String(32), primary_key=True),
    Column("subject_id", String(36), primary_key=True),
    Column("status", String(32), nullable=False),
    Column("version", Integer, nullable=False),
    Column("created_at", UTCDateTime, nullable=False),
    Column("updated_at", UTCDateTime, nullable=False),
    Column("last_event_id", String(36), nullable=False),
)

idempotency_keys = Table(
    "idempotency_keys",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("scope", String(32), nullable=False),
    Column("idem_key", String(160), nullable=False),
    Column("reference_event_id", String(36), nullable=False),
    Column("result_json", JSON),
    Column("created_at", UTCDateTime),
    UniqueConstraint("scope", "idem_key", name="uq_idempotency_scope_key"),
)
