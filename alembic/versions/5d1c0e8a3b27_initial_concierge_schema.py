"""initial concierge schema

Revision ID: 5d1c0e8a3b27
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "5d1c0e8a3b27"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

resident_type = sa.Enum("primary_tenant", "co_tenant", "authorized_occupant", name="resident_type")
resident_role = sa.Enum("leaseholder", "emergency_contact", "guarantor", name="resident_role")
service_request_priority = sa.Enum("low", "medium", "high", "urgent", name="service_request_priority")
service_request_status = sa.Enum(
    "submitted", "acknowledged", "triaged", "in_progress", "resolved", "closed",
    name="service_request_status",
)
order_status = sa.Enum("pending", "assigned", "in_progress", "completed", "cancelled", name="order_status")


def _id_column():
    return sa.Column("id", sa.String(), nullable=False)


def _created_at_column():
    return sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "sites",
        _id_column(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("address", sa.String(), nullable=False),
        sa.Column("property_nickname", sa.String(), nullable=True),
        sa.Column("property_description", sa.String(), nullable=True),
        sa.Column("property_date_acquired", sa.Date(), nullable=True),
        sa.Column("property_value_assessed", sa.Numeric(10, 2), nullable=True),
        sa.Column("property_value_mortgage_total", sa.Numeric(10, 2), nullable=True),
        sa.Column("mortgage_payment_principal", sa.Numeric(10, 2), nullable=True),
        sa.Column("mortgage_payment_interest", sa.Numeric(10, 2), nullable=True),
        _created_at_column(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_sites_id", "sites", ["id"], unique=False)

    op.create_table(
        "space_types",
        _id_column(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        _created_at_column(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index("ix_space_types_id", "space_types", ["id"], unique=False)

    op.create_table(
        "spaces",
        _id_column(),
        sa.Column("identifier", sa.String(), nullable=False),
        sa.Column("site_id", sa.String(), nullable=False),
        sa.Column("space_type_id", sa.String(), nullable=False),
        _created_at_column(),
        sa.ForeignKeyConstraint(["site_id"], ["sites.id"]),
        sa.ForeignKeyConstraint(["space_type_id"], ["space_types.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_spaces_id", "spaces", ["id"], unique=False)
    op.create_index("ix_spaces_site_id", "spaces", ["site_id"], unique=False)
    op.create_index("ix_spaces_space_type_id", "spaces", ["space_type_id"], unique=False)

    op.create_table(
        "residents",
        _id_column(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("type", resident_type, nullable=False),
        sa.Column("role", resident_role, nullable=False),
        sa.Column("user_id", sa.String(), nullable=True),
        _created_at_column(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_residents_id", "residents", ["id"], unique=False)
    op.create_index("ix_residents_email", "residents", ["email"], unique=False)
    op.create_index("ix_residents_user_id", "residents", ["user_id"], unique=False)

    op.create_table(
        "leases",
        _id_column(),
        sa.Column("resident_id", sa.String(), nullable=False),
        sa.Column("space_id", sa.String(), nullable=False),
        sa.Column("rental_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("market_value", sa.Numeric(10, 2), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        _created_at_column(),
        sa.ForeignKeyConstraint(["resident_id"], ["residents.id"]),
        sa.ForeignKeyConstraint(["space_id"], ["spaces.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_leases_id", "leases", ["id"], unique=False)
    op.create_index("ix_leases_resident_id", "leases", ["resident_id"], unique=False)
    op.create_index("ix_leases_space_id", "leases", ["space_id"], unique=False)

    op.create_table(
        "funders",
        _id_column(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        _created_at_column(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_funders_id", "funders", ["id"], unique=False)

    op.create_table(
        "lease_funders",
        _id_column(),
        sa.Column("lease_id", sa.String(), nullable=False),
        sa.Column("funder_id", sa.String(), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        _created_at_column(),
        sa.ForeignKeyConstraint(["lease_id"], ["leases.id"]),
        sa.ForeignKeyConstraint(["funder_id"], ["funders.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_lease_funders_id", "lease_funders", ["id"], unique=False)
    op.create_index("ix_lease_funders_lease_id", "lease_funders", ["lease_id"], unique=False)
    op.create_index("ix_lease_funders_funder_id", "lease_funders", ["funder_id"], unique=False)

    op.create_table(
        "revenue_events",
        _id_column(),
        sa.Column("lease_id", sa.String(), nullable=False),
        sa.Column("funder_id", sa.String(), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("event_date", sa.Date(), nullable=False),
        sa.Column("month", sa.String(length=7), nullable=False),
        _created_at_column(),
        sa.ForeignKeyConstraint(["lease_id"], ["leases.id"]),
        sa.ForeignKeyConstraint(["funder_id"], ["funders.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_revenue_events_id", "revenue_events", ["id"], unique=False)
    op.create_index("ix_revenue_events_lease_id", "revenue_events", ["lease_id"], unique=False)
    op.create_index("ix_revenue_events_funder_id", "revenue_events", ["funder_id"], unique=False)
    op.create_index("ix_revenue_events_event_date", "revenue_events", ["event_date"], unique=False)
    op.create_index("ix_revenue_events_month", "revenue_events", ["month"], unique=False)

    op.create_table(
        "service_requests",
        _id_column(),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("priority", service_request_priority, nullable=False),
        sa.Column("status", service_request_status, nullable=False),
        sa.Column("resident_id", sa.String(), nullable=False),
        sa.Column("space_id", sa.String(), nullable=False),
        sa.Column("notes", sa.String(), nullable=True),
        _created_at_column(),
        sa.Column("acknowledged_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("triaged_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["resident_id"], ["residents.id"]),
        sa.ForeignKeyConstraint(["space_id"], ["spaces.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_service_requests_id", "service_requests", ["id"], unique=False)
    op.create_index("ix_service_requests_status", "service_requests", ["status"], unique=False)
    op.create_index("ix_service_requests_resident_id", "service_requests", ["resident_id"], unique=False)
    op.create_index("ix_service_requests_space_id", "service_requests", ["space_id"], unique=False)

    op.create_table(
        "service_orders",
        _id_column(),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("status", order_status, nullable=False),
        sa.Column("assigned_staff_id", sa.String(), nullable=True),
        sa.Column("estimated_cost", sa.Numeric(10, 2), nullable=True),
        sa.Column("actual_cost", sa.Numeric(10, 2), nullable=True),
        sa.Column("completion_notes", sa.String(), nullable=True),
        _created_at_column(),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_service_orders_id", "service_orders", ["id"], unique=False)
    op.create_index("ix_service_orders_status", "service_orders", ["status"], unique=False)
    op.create_index("ix_service_orders_assigned_staff_id", "service_orders", ["assigned_staff_id"], unique=False)

    op.create_table(
        "work_orders",
        _id_column(),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        # type already created with service_orders
        sa.Column("status", postgresql.ENUM(name="order_status", create_type=False), nullable=False),
        sa.Column("contractor_name", sa.String(), nullable=True),
        sa.Column("contractor_contact", sa.String(), nullable=True),
        sa.Column("estimated_cost", sa.Numeric(10, 2), nullable=True),
        sa.Column("actual_cost", sa.Numeric(10, 2), nullable=True),
        sa.Column("completion_notes", sa.String(), nullable=True),
        _created_at_column(),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_work_orders_id", "work_orders", ["id"], unique=False)
    op.create_index("ix_work_orders_status", "work_orders", ["status"], unique=False)

    op.create_table(
        "service_request_service_orders",
        _id_column(),
        sa.Column("service_request_id", sa.String(), nullable=False),
        sa.Column("service_order_id", sa.String(), nullable=False),
        _created_at_column(),
        sa.ForeignKeyConstraint(["service_request_id"], ["service_requests.id"]),
        sa.ForeignKeyConstraint(["service_order_id"], ["service_orders.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("service_request_id", "service_order_id"),
    )
    op.create_index("ix_service_request_service_orders_id", "service_request_service_orders", ["id"], unique=False)
    op.create_index(
        "ix_service_request_service_orders_service_request_id",
        "service_request_service_orders", ["service_request_id"], unique=False,
    )
    op.create_index(
        "ix_service_request_service_orders_service_order_id",
        "service_request_service_orders", ["service_order_id"], unique=False,
    )

    op.create_table(
        "service_request_work_orders",
        _id_column(),
        sa.Column("service_request_id", sa.String(), nullable=False),
        sa.Column("work_order_id", sa.String(), nullable=False),
        _created_at_column(),
        sa.ForeignKeyConstraint(["service_request_id"], ["service_requests.id"]),
        sa.ForeignKeyConstraint(["work_order_id"], ["work_orders.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("service_request_id", "work_order_id"),
    )
    op.create_index("ix_service_request_work_orders_id", "service_request_work_orders", ["id"], unique=False)
    op.create_index(
        "ix_service_request_work_orders_service_request_id",
        "service_request_work_orders", ["service_request_id"], unique=False,
    )
    op.create_index(
        "ix_service_request_work_orders_work_order_id",
        "service_request_work_orders", ["work_order_id"], unique=False,
    )

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("actor_id", sa.String(), nullable=False),
        sa.Column("actor_email", sa.String(), nullable=True),
        sa.Column("actor_role", sa.String(), nullable=True),
        sa.Column("action", sa.String(), nullable=False),
        sa.Column("entity_type", sa.String(), nullable=False),
        sa.Column("entity_id", sa.String(), nullable=False),
        sa.Column("source", sa.String(), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
        _created_at_column(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_audit_logs_id", "audit_logs", ["id"], unique=False)
    op.create_index("ix_audit_logs_actor_id", "audit_logs", ["actor_id"], unique=False)
    op.create_index("ix_audit_logs_actor_email", "audit_logs", ["actor_email"], unique=False)
    op.create_index("ix_audit_logs_action", "audit_logs", ["action"], unique=False)
    op.create_index("ix_audit_logs_entity_type", "audit_logs", ["entity_type"], unique=False)
    op.create_index("ix_audit_logs_entity_id", "audit_logs", ["entity_id"], unique=False)
    op.create_index("ix_audit_logs_source", "audit_logs", ["source"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    for table in (
        "audit_logs",
        "service_request_work_orders",
        "service_request_service_orders",
        "work_orders",
        "service_orders",
        "service_requests",
        "revenue_events",
        "lease_funders",
        "funders",
        "leases",
        "residents",
        "spaces",
        "space_types",
        "sites",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_type in (order_status, service_request_status, service_request_priority, resident_role, resident_type):
        enum_type.drop(bind, checkfirst=True)
