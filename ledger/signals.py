from django.dispatch import Signal

# Sent once per successful registration, after the transaction commits.
# Receivers get sender=Device and device=<Device>.
device_registered = Signal()
