class LedgerError(Exception):
    """Base class for every business rule violation raised by the ledger."""


class AlreadyRegistered(LedgerError):
    """Raised when a device_id has already been registered."""

    def __init__(self, device_id):
        self.device_id = device_id
        super().__init__(f"Device already registered: {device_id}")


class NotFound(LedgerError):
    """Raised when a device_id has never been registered."""

    def __init__(self, device_id):
        self.device_id = device_id
        super().__init__(f"Device not found: {device_id}")


class NotOwner(LedgerError):
    """Raised when the caller is not the principal that registered the device."""

    def __init__(self, device_id, caller):
        self.device_id = device_id
        self.caller = caller
        super().__init__(f"Not device owner: {device_id}")


class InvalidAmount(LedgerError):
    """Raised when an energy usage reading is not a non-negative integer."""

    def __init__(self, amount):
        self.amount = amount
        super().__init__(f"Invalid energy usage amount: {amount!r}")
