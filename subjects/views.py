from rest_framework import viewsets
from rest_framework.response import Response
from rest_framework.decorators import action
from django.contrib.auth import get_user_model
from .models import Subject, CourseOffering
from .serializers import SubjectSerializer, CourseOfferingSerializer, CourseOfferingDetailSerializer
from accounts.serializers import StudentSerializer
from core.views import ProtectedDestroyMixin
from assessments.models import Mark
from assessments.serializers import AssessmentSerializer
from grading.services import course_results
from grading.store import GradeStore

User = get_user_model()

class SubjectViewSet(ProtectedDestroyMixin, viewsets.ModelViewSet):
    queryset = Subject.objects.all()
    serializer_class = SubjectSerializer
    filterset_fields = ["code"]

class CourseOfferingViewSet(viewsets.ModelViewSet):
    queryset = CourseOffering.objects.select_related("subject","semester","teacher").all()
    serializer_class = CourseOfferingSerializer
    filterset_fields = ["semester","subject","teacher"]

    def get_serializer_class(self):
        # list/retrieve → serializer enrichi (code, titre, crédits, semestre, enseignant)
        if self.action in ("list","retrieve"):
            return CourseOfferingDetailSerializer
        return CourseOfferingSerializer

    @action(detail=True, methods=["get"])
    def assessments(self, request, pk=None):
        offering = self.get_object()
        return Response(AssessmentSerializer(offering.assessments.all(), many=True).data)

    @action(detail=True, methods=["get"])
    def marks(self, request, pk=None):
        """Vue enseignant: toutes les notes de l'offering, par élève puis épreuve."""
        offering = self.get_object()
        qs = (Mark.objects
              .filter(assessment__course_offering=offering)
              .select_related("student","assessment")
              .order_by("student_id","assessment_id"))
        data = [
            {
                "mark_id": m.id,
                "assessment_id": m.assessment_id,
                "student_id": m.student_id,
                "marks_obtained": float(m.marks_obtained),
                "student_name": m.student.name,
                "assessment_name": m.assessment.name,
                "max_marks": float(m.assessment.max_marks),
                "weight_percent": float(m.assessment.weight_percent),
            }
            for m in qs
        ]
        return Response(data)

    @action(detail=True, methods=["get"])
    def students(self, request, pk=None):
        # pas de modèle d'inscription: tous les élèves
        self.get_object()
        qs = User.objects.filter(role=User.Role.STUDENT)
        return Response(StudentSerializer(qs, many=True).data)

    @action(detail=True, methods=["get"])
    def results(self, request, pk=None):
        store = GradeStore()
        offering = store.offering(self.get_object().id)
        return Response(course_results(store, offering))
