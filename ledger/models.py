"""
Persistence Models — Energy Ledger (Django ORM)

Three tables back the ledger:

- Device: the registry. One row per device_id, created once and never changed.
- EnergyRecord: the append-only ledger of usage readings, bucketed by UTC day.
- MonthlyAggregate: running totals per (device, 30-day bucket), written only
  by the aggregate maintainer in the same transaction as each EnergyRecord.

Timestamps are stored as integer seconds since the epoch rather than
DateTimeFields. Bucket keys are derived by integer truncation and must compare
exactly, which a timezone-aware datetime column would not guarantee.

Rows are never deleted. Foreign keys use PROTECT so that an accidental delete
of a Device fails instead of silently dropping its history.
"""

from django.db import models


class Device(models.Model):
    """
    A registered metering device.

    owner holds the caller identity supplied at registration. It is a plain
    string rather than a foreign key to the auth user table, so the ledger does
    not depend on how the host environment authenticates principals.
    """

    device_id = models.CharField(max_length=255, primary_key=True)
    device_type = models.CharField(max_length=255)
    owner = models.CharField(max_length=255, db_index=True)
    is_active = models.BooleanField(default=True)
    registered_at = models.BigIntegerField()

    def __str__(self):
        return f"Device {self.device_id} ({self.device_type}) - owner: {self.owner}"


class EnergyRecord(models.Model):
    """
    A single usage reading.

    Several readings may share a (device, day_bucket); they are kept
    individually and ordered by id, which is the insertion sequence.
    """

    device = models.ForeignKey(
        Device,
        on_delete=models.PROTECT,
        related_name="records",
    )

    day_bucket = models.BigIntegerField()
    energy_usage = models.PositiveBigIntegerField()
    data_source = models.CharField(max_length=255)

    # Opaque payload, never parsed by the ledger.
    metadata = models.TextField(blank=True)

    recorded_at = models.BigIntegerField()

    class Meta:
        ordering = ["device", "day_bucket", "id"]
        indexes = [
            models.Index(fields=["device", "day_bucket", "id"], name="ledger_record_device_day"),
        ]

    def __str__(self):
        return f"Record {self.id} - {self.device_id} @ {self.day_bucket}: {self.energy_usage}"


class MonthlyAggregate(models.Model):
    """
    Running total for one device over one 30-day bucket.

    days_recorded counts contributing records, not distinct calendar days: two
    readings on the same day increment it twice.
    """

    device = models.ForeignKey(
        Device,
        on_delete=models.PROTECT,
        related_name="monthly_aggregates",
    )

    month_bucket = models.BigIntegerField()
    total_energy_usage = models.PositiveBigIntegerField(default=0)
    days_recorded = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["device", "month_bucket"]
        constraints = [
            models.UniqueConstraint(
                fields=["device", "month_bucket"],
                name="ledger_unique_device_month_bucket",
            ),
        ]

    def __str__(self):
        return (
            f"Aggregate {self.device_id} @ {self.month_bucket}: "
            f"{self.total_energy_usage} over {self.days_recorded} records"
        )
