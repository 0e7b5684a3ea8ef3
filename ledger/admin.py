from django.contrib import admin

from ledger.models import Device, EnergyRecord, MonthlyAggregate


class ReadOnlyAdmin(admin.ModelAdmin):
    """The ledger is append-only through its use cases; the admin only inspects it."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Device)
class DeviceAdmin(ReadOnlyAdmin):
    list_display = ["device_id", "device_type", "owner", "is_active", "registered_at"]
    search_fields = ["device_id", "owner"]


@admin.register(EnergyRecord)
class EnergyRecordAdmin(ReadOnlyAdmin):
    list_display = ["id", "device", "day_bucket", "energy_usage", "data_source", "recorded_at"]
    list_filter = ["data_source"]
    search_fields = ["device__device_id"]


@admin.register(MonthlyAggregate)
class MonthlyAggregateAdmin(ReadOnlyAdmin):
    list_display = ["device", "month_bucket", "total_energy_usage", "days_recorded"]
    search_fields = ["device__device_id"]
