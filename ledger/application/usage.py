"""
Application Use Case — Usage Ledger

Appends usage readings and keeps the monthly aggregates consistent with them.

Core guarantees provided:

- Atomicity: the record insert and the aggregate update run inside one
  transaction.atomic() block. Either both commit or neither does, so no reader
  can observe a record without its aggregate contribution.
- Row-level locking: select_for_update() on the device row serializes every
  write for that device, and therefore for all of its month buckets.
- No partial effect on failure: ownership and amount are checked before any
  row is written.
"""

import logging

from django.db import transaction

from ledger.application.aggregates import MAX_ENERGY_USAGE, apply_record, fits_in_aggregate
from ledger.application.registry import assert_owner, get_device_info
from ledger.domain import buckets
from ledger.domain.exceptions import InvalidAmount, NotOwner
from ledger.models import EnergyRecord

logger = logging.getLogger(__name__)


def _is_valid_amount(energy_usage):
    # bool is a subclass of int, but True is not a reading.
    return (
        isinstance(energy_usage, int)
        and not isinstance(energy_usage, bool)
        and 0 <= energy_usage <= MAX_ENERGY_USAGE
    )


def record_energy_usage(device_id, energy_usage, data_source, metadata, caller, now):
    """
    Appends a reading for device_id and returns the new record's id.

    now is captured once by the caller and used for both recorded_at and the
    day bucket, so the two can never disagree within one call.
    """
    with transaction.atomic():
        try:
            # Lock the device row so concurrent writers for this device queue up
            assert_owner(device_id, caller, for_update=True)
        except NotOwner:
            logger.warning(
                "Rejected reading from non-owner: device=%s caller=%s",
                device_id, caller,
            )
            raise

        if not _is_valid_amount(energy_usage):
            logger.warning(
                "Rejected reading with invalid amount: device=%s amount=%r",
                device_id, energy_usage,
            )
            raise InvalidAmount(energy_usage)

        day_bucket = buckets.day_bucket(now)

        if not fits_in_aggregate(device_id, day_bucket, energy_usage):
            logger.warning(
                "Rejected reading that overflows the monthly total: device=%s amount=%r",
                device_id, energy_usage,
            )
            raise InvalidAmount(energy_usage)

        record = EnergyRecord.objects.create(
            device_id=device_id,
            day_bucket=day_bucket,
            energy_usage=energy_usage,
            data_source=data_source,
            metadata=metadata,
            recorded_at=now,
        )

        apply_record(device_id, day_bucket, energy_usage)

    logger.info(
        "Reading recorded: record=%s device=%s day=%s amount=%s",
        record.pk, device_id, day_bucket, energy_usage,
    )
    return record.pk


def get_device_energy_data(device_id, from_timestamp, to_timestamp):
    """
    Returns the device's records whose day bucket lies in
    [day_bucket(from_timestamp), day_bucket(to_timestamp)], oldest day first and
    in insertion order within a day.

    Raises NotFound for an unregistered device. A registered device with no
    records in range yields an empty list.
    """
    device = get_device_info(device_id)

    return list(
        EnergyRecord.objects
        .filter(
            device=device,
            day_bucket__gte=buckets.day_bucket(from_timestamp),
            day_bucket__lte=buckets.day_bucket(to_timestamp),
        )
        .order_by("day_bucket", "id")
    )
