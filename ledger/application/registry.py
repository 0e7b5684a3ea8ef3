"""
Application Use Case — Device Registry

Owns device identity and ownership. Every other write path goes through
assert_owner() before touching the ledger.

Core guarantees provided:

- One-time registration: device_id is the primary key, so a second insert for
  the same id fails at the database level even when two registrations race.
- Atomicity: registration runs inside transaction.atomic(); a failed attempt
  leaves the first registration untouched.
- Post-commit notification: device_registered is only sent once the row is
  durably committed, never for a rolled-back registration.
"""

import logging

from django.db import IntegrityError, transaction

from ledger.domain.exceptions import AlreadyRegistered, NotFound, NotOwner
from ledger.models import Device
from ledger.signals import device_registered

logger = logging.getLogger(__name__)


def register_device(device_id, device_type, caller, now):
    """
    Registers a new device owned by caller.

    caller and now are supplied by the host environment and captured once by
    the caller of this function.
    """
    try:
        with transaction.atomic():
            # create() forces an INSERT, so an existing primary key raises
            # IntegrityError instead of overwriting the row.
            device = Device.objects.create(
                device_id=device_id,
                device_type=device_type,
                owner=caller,
                is_active=True,
                registered_at=now,
            )
            transaction.on_commit(
                lambda: device_registered.send(sender=Device, device=device)
            )
    except IntegrityError:
        logger.warning("Duplicate registration: device=%s caller=%s", device_id, caller)
        raise AlreadyRegistered(device_id)

    logger.info(
        "Device registered: device=%s type=%s owner=%s",
        device_id, device_type, caller,
    )
    return device


def get_device_info(device_id):
    try:
        return Device.objects.get(pk=device_id)
    except Device.DoesNotExist:
        raise NotFound(device_id) from None


def assert_owner(device_id, caller, for_update=False):
    """
    Returns the device if caller owns it.

    With for_update=True the device row stays locked until the enclosing
    transaction ends, which serializes all writes for that device.
    """
    queryset = Device.objects.all()
    if for_update:
        queryset = queryset.select_for_update()

    try:
        device = queryset.get(pk=device_id)
    except Device.DoesNotExist:
        raise NotFound(device_id) from None

    if device.owner != caller:
        raise NotOwner(device_id, caller)

    return device
