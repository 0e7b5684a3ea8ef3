from unittest import mock

from django.test import TestCase

from ledger.application.aggregates import get_monthly_aggregate
from ledger.application.registry import register_device
from ledger.application.usage import get_device_energy_data, record_energy_usage
from ledger.domain import buckets
from ledger.domain.exceptions import InvalidAmount, NotFound, NotOwner
from ledger.models import EnergyRecord, MonthlyAggregate

NOW = 1_700_000_000
DAY = buckets.day_bucket(NOW)
MONTH = buckets.month_bucket(NOW)


class RecordEnergyUsageTest(TestCase):
    """
    Each test runs inside a transaction that is rolled back automatically,
    ensuring full isolation between test cases.
    """

    def setUp(self):
        register_device("device1", "solar_panel", "alice", NOW - 3600)

    def test_record_then_read_back_for_the_day(self):
        record_id = record_energy_usage(
            "device1", 100, "smart_meter", "{'temperature': 25}", "alice", NOW
        )

        data = get_device_energy_data("device1", DAY, DAY)

        self.assertEqual(len(data), 1)
        record = data[0]
        self.assertEqual(record.pk, record_id)
        self.assertEqual(record.energy_usage, 100)
        self.assertEqual(record.data_source, "smart_meter")
        self.assertEqual(record.metadata, "{'temperature': 25}")
        self.assertEqual(record.day_bucket, DAY)
        self.assertEqual(record.recorded_at, NOW)

    def test_zero_usage_is_accepted(self):
        record_energy_usage("device1", 0, "smart_meter", "", "alice", NOW)

        aggregate = get_monthly_aggregate("device1", MONTH)
        self.assertEqual(aggregate.total_energy_usage, 0)
        self.assertEqual(aggregate.days_recorded, 1)

    def test_non_owner_is_rejected_without_side_effects(self):
        with self.assertRaises(NotOwner):
            record_energy_usage("device1", 100, "smart_meter", "{}", "mallory", NOW)

        self.assertEqual(EnergyRecord.objects.count(), 0)
        self.assertEqual(MonthlyAggregate.objects.count(), 0)

    def test_unregistered_device_raises_not_found(self):
        with self.assertRaises(NotFound):
            record_energy_usage("ghost", 100, "smart_meter", "{}", "alice", NOW)

        self.assertEqual(EnergyRecord.objects.count(), 0)

    def test_invalid_amounts_are_rejected_without_side_effects(self):
        for amount in (-1, 1.5, "100", None, True):
            with self.subTest(amount=amount):
                with self.assertRaises(InvalidAmount) as ctx:
                    record_energy_usage("device1", amount, "smart_meter", "{}", "alice", NOW)
                self.assertEqual(ctx.exception.amount, amount)

        self.assertEqual(EnergyRecord.objects.count(), 0)
        self.assertEqual(MonthlyAggregate.objects.count(), 0)

    def test_amount_above_column_max_is_rejected(self):
        with self.assertRaises(InvalidAmount):
            record_energy_usage("device1", 2**63, "smart_meter", "{}", "alice", NOW)

        self.assertEqual(EnergyRecord.objects.count(), 0)
        self.assertEqual(MonthlyAggregate.objects.count(), 0)

    def test_amount_at_column_max_is_accepted(self):
        record_energy_usage("device1", 2**63 - 1, "smart_meter", "{}", "alice", NOW)

        self.assertEqual(get_monthly_aggregate("device1", MONTH).total_energy_usage, 2**63 - 1)

    def test_reading_that_overflows_monthly_total_is_rejected(self):
        record_energy_usage("device1", 2**62, "smart_meter", "{}", "alice", NOW)

        with self.assertRaises(InvalidAmount):
            record_energy_usage("device1", 2**62, "smart_meter", "{}", "alice", NOW + 60)

        aggregate = get_monthly_aggregate("device1", MONTH)
        self.assertEqual(aggregate.total_energy_usage, 2**62)
        self.assertIsInstance(aggregate.total_energy_usage, int)
        self.assertEqual(aggregate.days_recorded, 1)
        self.assertEqual(EnergyRecord.objects.count(), 1)

    def test_large_readings_in_other_months_do_not_interfere(self):
        record_energy_usage("device1", 2**62, "smart_meter", "{}", "alice", NOW)
        record_energy_usage(
            "device1", 2**62, "smart_meter", "{}", "alice",
            MONTH + buckets.SECONDS_PER_MONTH_BUCKET,
        )

        self.assertEqual(EnergyRecord.objects.count(), 2)

    def test_ownership_is_checked_before_amount(self):
        with self.assertRaises(NotOwner):
            record_energy_usage("device1", -1, "smart_meter", "{}", "mallory", NOW)

    def test_aggregate_failure_rolls_back_record(self):
        """The record insert and the aggregate update must commit together."""
        with mock.patch(
            "ledger.application.usage.apply_record",
            side_effect=RuntimeError("aggregate store unavailable"),
        ):
            with self.assertRaises(RuntimeError):
                record_energy_usage("device1", 100, "smart_meter", "{}", "alice", NOW)

        self.assertEqual(EnergyRecord.objects.count(), 0)
        self.assertEqual(MonthlyAggregate.objects.count(), 0)

    def test_same_day_readings_are_all_kept(self):
        first = record_energy_usage("device1", 100, "smart_meter", "{}", "alice", NOW)
        second = record_energy_usage("device1", 50, "manual", "{}", "alice", NOW + 60)

        data = get_device_energy_data("device1", NOW, NOW)

        self.assertEqual([r.pk for r in data], [first, second])
        self.assertEqual([r.energy_usage for r in data], [100, 50])


class DeviceEnergyDataTest(TestCase):
    def setUp(self):
        register_device("device1", "solar_panel", "alice", NOW)
        register_device("device2", "heat_pump", "bob", NOW)

    def test_range_is_ordered_by_day_then_insertion(self):
        record_energy_usage("device1", 3, "smart_meter", "{}", "alice", NOW + 2 * 86400)
        record_energy_usage("device1", 1, "smart_meter", "{}", "alice", NOW)
        record_energy_usage("device1", 2, "smart_meter", "{}", "alice", NOW + 10)
        record_energy_usage("device1", 4, "smart_meter", "{}", "alice", NOW + 86400)

        data = get_device_energy_data("device1", NOW, NOW + 2 * 86400)

        self.assertEqual([r.energy_usage for r in data], [1, 2, 4, 3])

    def test_range_bounds_are_day_aligned_and_inclusive(self):
        record_energy_usage("device1", 10, "smart_meter", "{}", "alice", DAY)
        record_energy_usage("device1", 20, "smart_meter", "{}", "alice", DAY + 86400 + 5)
        record_energy_usage("device1", 30, "smart_meter", "{}", "alice", DAY + 2 * 86400)

        # Mid-day bounds still cover the whole first and last day.
        data = get_device_energy_data("device1", DAY + 43200, DAY + 86400 + 43200)

        self.assertEqual([r.energy_usage for r in data], [10, 20])

    def test_other_devices_are_excluded(self):
        record_energy_usage("device1", 10, "smart_meter", "{}", "alice", NOW)
        record_energy_usage("device2", 99, "smart_meter", "{}", "bob", NOW)

        data = get_device_energy_data("device1", NOW, NOW)

        self.assertEqual([r.energy_usage for r in data], [10])

    def test_registered_device_without_records_returns_empty(self):
        self.assertEqual(get_device_energy_data("device1", 0, NOW), [])

    def test_inverted_range_returns_empty(self):
        record_energy_usage("device1", 10, "smart_meter", "{}", "alice", NOW)

        self.assertEqual(get_device_energy_data("device1", NOW + 86400, NOW - 86400), [])

    def test_unregistered_device_raises_not_found(self):
        with self.assertRaises(NotFound):
            get_device_energy_data("ghost", 0, NOW)
