"""
Read-only entry points into the ledger.

Reads are unrestricted: no caller identity is required and none of these
functions write. Each one issues plain SELECTs, so it only ever sees committed
ledger and aggregate state.
"""

from ledger.application.aggregates import get_monthly_aggregate
from ledger.application.registry import get_device_info
from ledger.application.usage import get_device_energy_data

__all__ = [
    "get_device_info",
    "get_device_energy_data",
    "get_monthly_aggregate",
]
