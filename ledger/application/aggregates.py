"""
Application Use Case — Aggregate Maintainer

Keeps one MonthlyAggregate row per (device, 30-day bucket) in step with the
ledger. This module is the only writer to MonthlyAggregate.

apply_record() has no validation of its own: the usage ledger has already
checked ownership and amount, holds the device row lock and owns the
surrounding transaction.
"""

from django.db.models import F

from ledger.domain import buckets
from ledger.models import MonthlyAggregate

# Largest value a PositiveBigIntegerField column can hold.
MAX_ENERGY_USAGE = 2**63 - 1


def fits_in_aggregate(device_id, day_bucket, energy_usage):
    """True if adding energy_usage keeps the month total within MAX_ENERGY_USAGE."""
    total = (
        MonthlyAggregate.objects
        .filter(device_id=device_id, month_bucket=buckets.month_bucket(day_bucket))
        .values_list("total_energy_usage", flat=True)
        .first()
    )
    return (total or 0) + energy_usage <= MAX_ENERGY_USAGE


def apply_record(device_id, day_bucket, energy_usage):
    aggregate, _ = MonthlyAggregate.objects.get_or_create(
        device_id=device_id,
        month_bucket=buckets.month_bucket(day_bucket),
    )

    # Both counters move in one UPDATE; the device row lock keeps it serial per device.
    MonthlyAggregate.objects.filter(pk=aggregate.pk).update(
        total_energy_usage=F("total_energy_usage") + energy_usage,
        days_recorded=F("days_recorded") + 1,
    )


def get_monthly_aggregate(device_id, month_bucket):
    """
    Returns the aggregate stored under the exact (device_id, month_bucket) key.

    A missing row means no usage was recorded in that bucket, so a zero-valued,
    unsaved aggregate is returned instead of raising. Device existence is not
    checked here.
    """
    aggregate = MonthlyAggregate.objects.filter(
        device_id=device_id,
        month_bucket=month_bucket,
    ).first()

    if aggregate is None:
        aggregate = MonthlyAggregate(
            device_id=device_id,
            month_bucket=month_bucket,
            total_energy_usage=0,
            days_recorded=0,
        )

    return aggregate
