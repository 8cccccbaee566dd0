from django.db.models import ProtectedError
from rest_framework import viewsets, status
from rest_framework.exceptions import APIException
from .models import Semester
from .serializers import SemesterSerializer


class InUse(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Still referenced by other records; delete those first."
    default_code = "in_use"


class ProtectedDestroyMixin:
    """DELETE -> 409 quand des offerings pointent encore sur l'objet (on_delete=PROTECT)."""

    def perform_destroy(self, instance):
        try:
            instance.delete()
        except ProtectedError as exc:
            raise InUse(f"{instance} is still used by {len(exc.protected_objects)} course offering(s).")


class SemesterViewSet(ProtectedDestroyMixin, viewsets.ModelViewSet):
    queryset = Semester.objects.all()
    serializer_class = SemesterSerializer
    filterset_fields = ["name","ordinal"]
