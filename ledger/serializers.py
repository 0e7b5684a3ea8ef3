from rest_framework import serializers

from ledger.models import Device, EnergyRecord, MonthlyAggregate


class DeviceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Device
        fields = ["device_id", "device_type", "owner", "is_active", "registered_at"]
        read_only_fields = fields


class EnergyRecordSerializer(serializers.ModelSerializer):
    device_id = serializers.CharField(read_only=True)

    class Meta:
        model = EnergyRecord
        fields = [
            "id",
            "device_id",
            "day_bucket",
            "energy_usage",
            "data_source",
            "metadata",
            "recorded_at",
        ]
        read_only_fields = fields


class MonthlyAggregateSerializer(serializers.ModelSerializer):
    """Also serializes the unsaved zero-valued aggregate returned for empty buckets."""

    device_id = serializers.CharField(read_only=True)

    class Meta:
        model = MonthlyAggregate
        fields = ["device_id", "month_bucket", "total_energy_usage", "days_recorded"]
        read_only_fields = fields
