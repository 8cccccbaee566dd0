# assessments/views.py
from rest_framework import viewsets, status
from rest_framework.response import Response
from rest_framework.decorators import action

from .models import Assessment, Mark
from .serializers import AssessmentSerializer, MarkSerializer, BulkMarksUpsertSerializer

class AssessmentViewSet(viewsets.ModelViewSet):
    queryset = Assessment.objects.select_related("course_offering__subject")
    serializer_class = AssessmentSerializer
    filterset_fields = ["course_offering"]

    def get_serializer(self, *args, **kwargs):
        # PUT garde les champs non fournis
        if self.action == "update":
            kwargs["partial"] = True
        return super().get_serializer(*args, **kwargs)

    @action(detail=True, methods=["get"], url_path="marks")
    def marks(self, request, pk=None):
        """Liste des notes pour cette épreuve (id = pk)."""
        assessment = self.get_object()
        qs = Mark.objects.filter(assessment=assessment).select_related("student")
        data = [
            {
                "id": m.id,
                "student": {
                    "id": m.student.id,
                    "username": m.student.username,
                    "name": m.student.name,
                },
                "marks_obtained": float(m.marks_obtained),
            }
            for m in qs
        ]
        return Response(data)

class MarkViewSet(viewsets.ModelViewSet):
    queryset = Mark.objects.select_related("assessment", "student")
    serializer_class = MarkSerializer
    filterset_fields = ["assessment", "student"]  # GET /api/marks/?assessment=<id>
    http_method_names = ["get", "post", "put", "patch", "head", "options"]

    def get_serializer(self, *args, **kwargs):
        if self.action == "update":
            kwargs["partial"] = True
        return super().get_serializer(*args, **kwargs)

    @action(detail=False, methods=["post"], url_path="bulk")
    def bulk(self, request, *args, **kwargs):
        """Upsert de notes pour une épreuve."""
        ser = BulkMarksUpsertSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        result = ser.save()
        return Response(result, status=status.HTTP_200_OK)
