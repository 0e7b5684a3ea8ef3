from django.urls import path

from .views import (
    DeviceDetailView,
    DeviceListView,
    EnergyRecordListView,
    MonthlyAggregateView,
)

urlpatterns = [
    path("devices/", DeviceListView.as_view(), name="register-device"),
    path("devices/<str:device_id>/", DeviceDetailView.as_view(), name="device-detail"),
    path("devices/<str:device_id>/records/", EnergyRecordListView.as_view(), name="device-records"),
    path(
        "devices/<str:device_id>/aggregates/<int:month_bucket>/",
        MonthlyAggregateView.as_view(),
        name="device-monthly-aggregate",
    ),
]
