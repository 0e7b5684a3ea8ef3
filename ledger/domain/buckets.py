"""
Time bucketing for the energy ledger.

All timestamps are integer seconds since the Unix epoch (UTC). Buckets are
computed by plain truncation so that the same timestamp always lands in the
same bucket, regardless of server timezone:

- Day bucket: start of the UTC day containing the timestamp.
- Month bucket: start of the fixed 30-day period containing the timestamp.
  This is NOT a calendar month.
"""

import time

SECONDS_PER_DAY = 86400
DAYS_PER_MONTH_BUCKET = 30
SECONDS_PER_MONTH_BUCKET = SECONDS_PER_DAY * DAYS_PER_MONTH_BUCKET


def day_bucket(timestamp):
    return timestamp - (timestamp % SECONDS_PER_DAY)


def month_bucket(timestamp):
    return timestamp - (timestamp % SECONDS_PER_MONTH_BUCKET)


def now():
    """Current wall-clock time, truncated to whole seconds."""
    return int(time.time())
