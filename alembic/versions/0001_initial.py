"""initial

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19

"""

from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _status_columns():
    return [
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("confirmation_number", sa.String(length=40), nullable=True),
        sa.Column("rejection_reason", sa.String(length=500), nullable=True),
        sa.Column("response_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False, server_default=""),
        sa.Column("phone", sa.String(length=40), nullable=False, server_default=""),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="customer"),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"], unique=False)

    op.create_table(
        "services",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("provider_id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("price", sa.Float(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="active"),
        sa.Column("location", sa.String(length=200), nullable=False, server_default=""),
        sa.Column("attributes", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_services_provider_id", "services", ["provider_id"])
    op.create_index("ix_services_type", "services", ["type"])

    op.create_table(
        "tours",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("owner_id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("price", sa.Float(), nullable=False, server_default="0"),
        sa.Column("location", sa.String(length=200), nullable=False, server_default=""),
        sa.Column("category", sa.String(length=80), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_tours_owner_id", "tours", ["owner_id"])

    op.create_table(
        "vehicles",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("owner_id", sa.String(length=36), nullable=False),
        sa.Column("brand", sa.String(length=80), nullable=False),
        sa.Column("model", sa.String(length=80), nullable=False),
        sa.Column("vehicle_number", sa.String(length=40), nullable=False, server_default=""),
        sa.Column("vehicle_type", sa.String(length=40), nullable=False, server_default=""),
        sa.Column("price", sa.Float(), nullable=False, server_default="0"),
        sa.Column("location", sa.String(length=200), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_vehicles_owner_id", "vehicles", ["owner_id"])

    op.create_table(
        "restaurants",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("owner_id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("address", sa.String(length=300), nullable=False, server_default=""),
        sa.Column("table_count", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("price", sa.Float(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_restaurants_owner_id", "restaurants", ["owner_id"])

    op.create_table(
        "service_reservations",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("customer_id", sa.String(length=36), nullable=False),
        sa.Column("service_id", sa.String(length=36), nullable=False),
        sa.Column("provider_id", sa.String(length=36), nullable=False),
        sa.Column("check_in_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("check_out_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("guests", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("customer_name", sa.String(length=200), nullable=False),
        sa.Column("customer_email", sa.String(length=320), nullable=False),
        sa.Column("customer_phone", sa.String(length=40), nullable=False),
        sa.Column("cnic_number", sa.String(length=20), nullable=False, server_default=""),
        sa.Column("cnic_photo", sa.String(length=512), nullable=False, server_default=""),
        sa.Column("rooms", sa.Integer(), nullable=True),
        sa.Column("room_type", sa.String(length=80), nullable=True),
        sa.Column("group_size", sa.Integer(), nullable=True),
        sa.Column("vehicle_type", sa.String(length=80), nullable=True),
        sa.Column("event_type", sa.String(length=80), nullable=True),
        sa.Column("special_requests", sa.Text(), nullable=False, server_default=""),
        sa.Column("price_per_unit", sa.Float(), nullable=False),
        sa.Column("total_amount", sa.Float(), nullable=False),
        sa.Column("payment_status", sa.String(length=20), nullable=False, server_default="pending"),
        *_status_columns(),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("confirmation_number", name="uq_service_reservations_confirmation_number"),
    )
    op.create_index("ix_service_reservations_customer_id", "service_reservations", ["customer_id"])
    op.create_index("ix_service_reservations_service_id", "service_reservations", ["service_id"])
    op.create_index("ix_service_reservations_provider_id", "service_reservations", ["provider_id"])
    op.create_index("ix_service_reservations_status", "service_reservations", ["status"])

    op.create_table(
        "tour_reservations",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("customer_id", sa.String(length=36), nullable=False),
        sa.Column("tour_id", sa.String(length=36), nullable=False),
        sa.Column("tour_owner_id", sa.String(length=320), nullable=False),
        sa.Column("customer_name", sa.String(length=200), nullable=False),
        sa.Column("customer_email", sa.String(length=320), nullable=False),
        sa.Column("customer_phone", sa.String(length=40), nullable=False),
        sa.Column("tour_name", sa.String(length=200), nullable=False),
        sa.Column("tour_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("guests", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("tour_price", sa.Float(), nullable=False),
        sa.Column("total_amount", sa.Float(), nullable=False),
        sa.Column("special_requests", sa.Text(), nullable=False, server_default=""),
        *_status_columns(),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_tour_reservations_customer_id", "tour_reservations", ["customer_id"])
    op.create_index("ix_tour_reservations_customer_email", "tour_reservations", ["customer_email"])
    op.create_index("ix_tour_reservations_tour_id", "tour_reservations", ["tour_id"])
    op.create_index("ix_tour_reservations_tour_owner_id", "tour_reservations", ["tour_owner_id"])
    op.create_index("ix_tour_reservations_status", "tour_reservations", ["status"])

    op.create_table(
        "vehicle_reservations",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("vehicle_id", sa.String(length=36), nullable=False),
        sa.Column("vehicle_owner_id", sa.String(length=36), nullable=False),
        sa.Column("vehicle_number", sa.String(length=40), nullable=False, server_default=""),
        sa.Column("location", sa.String(length=200), nullable=False, server_default=""),
        sa.Column("pickup_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("return_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("daily_rate", sa.Float(), nullable=False),
        sa.Column("need_driver", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("transaction_id", sa.String(length=36), nullable=False),
        *_status_columns(),
    )
    op.create_index("ix_vehicle_reservations_user_id", "vehicle_reservations", ["user_id"])
    op.create_index("ix_vehicle_reservations_vehicle_id", "vehicle_reservations", ["vehicle_id"])
    op.create_index("ix_vehicle_reservations_vehicle_owner_id", "vehicle_reservations", ["vehicle_owner_id"])
    op.create_index("ix_vehicle_reservations_status", "vehicle_reservations", ["status"])

    op.create_table(
        "restaurant_reservations",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("restaurant_id", sa.String(length=36), nullable=False),
        sa.Column("restaurant_owner_id", sa.String(length=36), nullable=False),
        sa.Column("reservation_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("guests", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("table_number", sa.Integer(), nullable=True),
        sa.Column("customer_name", sa.String(length=200), nullable=False),
        sa.Column("customer_email", sa.String(length=320), nullable=False),
        sa.Column("customer_phone", sa.String(length=40), nullable=False),
        sa.Column("special_requests", sa.Text(), nullable=False, server_default=""),
        sa.Column("price_per_guest", sa.Float(), nullable=False, server_default="0"),
        sa.Column("total_amount", sa.Float(), nullable=False, server_default="0"),
        *_status_columns(),
    )
    op.create_index("ix_restaurant_reservations_user_id", "restaurant_reservations", ["user_id"])
    op.create_index("ix_restaurant_reservations_restaurant_id", "restaurant_reservations", ["restaurant_id"])
    op.create_index("ix_restaurant_reservations_restaurant_owner_id", "restaurant_reservations", ["restaurant_owner_id"])
    op.create_index("ix_restaurant_reservations_status", "restaurant_reservations", ["status"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("type", sa.String(length=40), nullable=False),
        sa.Column("read", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("data", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_notifications_user_id", "notifications", ["user_id"])
    op.create_index("ix_notifications_type", "notifications", ["type"])
    op.create_index("ix_notifications_read", "notifications", ["read"])

    op.create_table(
        "audit_logs",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("actor_user_id", sa.String(length=36), nullable=False),
        sa.Column("action", sa.String(length=80), nullable=False),
        sa.Column("entity_type", sa.String(length=40), nullable=False),
        sa.Column("entity_id", sa.String(length=36), nullable=False),
        sa.Column("details_json", sa.Text(), nullable=False, server_default="{}"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_audit_logs_actor_user_id", "audit_logs", ["actor_user_id"])
    op.create_index("ix_audit_logs_action", "audit_logs", ["action"])
    op.create_index("ix_audit_logs_entity_type", "audit_logs", ["entity_type"])
    op.create_index("ix_audit_logs_entity_id", "audit_logs", ["entity_id"])

    op.create_table(
        "provider_requests",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("provider_type", sa.String(length=20), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("business_name", sa.String(length=200), nullable=False),
        sa.Column("business_phone", sa.String(length=40), nullable=False),
        sa.Column("business_email", sa.String(length=320), nullable=False, server_default=""),
        sa.Column("business_address", sa.String(length=300), nullable=False, server_default=""),
        sa.Column("details", sa.JSON(), nullable=True),
        sa.Column("documents", sa.JSON(), nullable=True),
        sa.Column("additional_info", sa.Text(), nullable=False, server_default=""),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("rejection_reason", sa.String(length=500), nullable=True),
        sa.Column("reviewed_by", sa.String(length=36), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_provider_requests_user_id", "provider_requests", ["user_id"])
    op.create_index("ix_provider_requests_provider_type", "provider_requests", ["provider_type"])
    op.create_index("ix_provider_requests_status", "provider_requests", ["status"])


def downgrade() -> None:
    for table in (
        "provider_requests", "audit_logs", "notifications", "restaurant_reservations", "vehicle_reservations",
        "tour_reservations", "service_reservations", "restaurants", "vehicles", "tours",
        "services", "users",
    ):
        op.drop_table(table)
