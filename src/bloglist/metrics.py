"""Shared OTel metrics instruments for the service."""

from opentelemetry import metrics

METER_NAME = "bloglist"

meter = metrics.get_meter(METER_NAME)

blogs_created_total = meter.create_counter(
    name="blogs_created_total",
    description="Total blogs created",
    unit="1",
)

blogs_deleted_total = meter.create_counter(
    name="blogs_deleted_total",
    description="Total blogs removed (deletes of unknown ids are not counted)",
    unit="1",
)

users_registered_total = meter.create_counter(
    name="users_registered_total",
    description="Total users registered",
    unit="1",
)

login_failures_total = meter.create_counter(
    name="login_failures_total",
    description="Rejected login attempts",
    unit="1",
)
