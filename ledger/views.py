"""
API Layer — Energy Ledger Endpoints (Django REST Framework)

Thin controllers over the ledger use cases. Each view:

- Validates and coerces its input
- Captures the caller identity and the current time exactly once
- Delegates to the application layer
- Translates domain exceptions into HTTP responses

No business rules live here. Authorization of writes (device ownership) is
decided by the use cases; the views only require that a write request carries
an authenticated identity, which the IsAuthenticatedOrReadOnly default
permission enforces.
"""

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from ledger.application import queries
from ledger.application.registry import register_device
from ledger.application.usage import record_energy_usage
from ledger.domain import buckets
from ledger.domain.exceptions import AlreadyRegistered, InvalidAmount, NotFound, NotOwner
from ledger.serializers import (
    DeviceSerializer,
    EnergyRecordSerializer,
    MonthlyAggregateSerializer,
)


def _parse_int(value):
    """Accepts ints and integer strings; rejects bools, floats and anything else."""
    if isinstance(value, bool):
        raise TypeError(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value)
    raise TypeError(value)


def _not_found(exc):
    return Response({"error": str(exc)}, status=status.HTTP_404_NOT_FOUND)


class DeviceListView(APIView):
    """
    POST /api/ledger/devices/

    Registers a device owned by the authenticated caller.
    """

    def post(self, request):
        device_id = request.data.get("device_id")
        device_type = request.data.get("device_type")

        if not device_id or not device_type:
            return Response(
                {"error": "device_id and device_type are required."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        if not isinstance(device_id, str) or not isinstance(device_type, str):
            return Response(
                {"error": "device_id and device_type must be strings."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        caller = request.user.get_username()
        now = buckets.now()

        try:
            device = register_device(device_id, device_type, caller, now)
        except AlreadyRegistered as exc:
            return Response({"error": str(exc)}, status=status.HTTP_409_CONFLICT)

        return Response(DeviceSerializer(device).data, status=status.HTTP_201_CREATED)


class DeviceDetailView(APIView):
    """
    GET /api/ledger/devices/<device_id>/
    """

    def get(self, request, device_id):
        try:
            device = queries.get_device_info(device_id)
        except NotFound as exc:
            return _not_found(exc)

        return Response(DeviceSerializer(device).data, status=status.HTTP_200_OK)


class EnergyRecordListView(APIView):
    """
    POST /api/ledger/devices/<device_id>/records/
    GET  /api/ledger/devices/<device_id>/records/?from=<ts>&to=<ts>
    """

    def post(self, request, device_id):
        energy_usage = request.data.get("energy_usage")
        data_source = request.data.get("data_source")
        metadata = request.data.get("metadata", "")

        if energy_usage is None or not data_source:
            return Response(
                {"error": "energy_usage and data_source are required."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            energy_usage = _parse_int(energy_usage)
        except (TypeError, ValueError):
            return Response(
                {"error": "energy_usage must be an integer."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        if not isinstance(data_source, str) or not isinstance(metadata, str):
            return Response(
                {"error": "data_source and metadata must be strings."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        caller = request.user.get_username()
        now = buckets.now()

        try:
            record_id = record_energy_usage(
                device_id, energy_usage, data_source, metadata, caller, now
            )
        except NotFound as exc:
            return _not_found(exc)
        except NotOwner as exc:
            return Response({"error": str(exc)}, status=status.HTTP_403_FORBIDDEN)
        except InvalidAmount as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({"record_id": record_id}, status=status.HTTP_201_CREATED)

    def get(self, request, device_id):
        try:
            from_timestamp = int(request.query_params["from"])
            to_timestamp = int(request.query_params["to"])
        except (KeyError, ValueError):
            return Response(
                {"error": "from and to must be integer timestamps."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            records = queries.get_device_energy_data(device_id, from_timestamp, to_timestamp)
        except NotFound as exc:
            return _not_found(exc)

        return Response(
            EnergyRecordSerializer(records, many=True).data,
            status=status.HTTP_200_OK,
        )


class MonthlyAggregateView(APIView):
    """
    GET /api/ledger/devices/<device_id>/aggregates/<month_bucket>/

    An empty bucket is reported as zero usage, not as an error.
    """

    def get(self, request, device_id, month_bucket):
        aggregate = queries.get_monthly_aggregate(device_id, month_bucket)
        return Response(
            MonthlyAggregateSerializer(aggregate).data,
            status=status.HTTP_200_OK,
        )
