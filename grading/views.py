from django.contrib.auth import get_user_model
from rest_framework import viewsets, serializers
from rest_framework.exceptions import NotFound
from rest_framework.response import Response
from rest_framework.views import APIView

from core.models import Semester
from .models import GradeBand
from .serializers import GradeBandSerializer
from .services import (
    resolve_grade, course_grade, compute_gpa, student_transcript,
    GpaScope, ALL_SEMESTERS,
)
from .store import GradeStore

User = get_user_model()


def _student_or_404(student_id: int):
    if not User.objects.filter(id=student_id).exists():
        raise NotFound("student not found")


class GradeBandViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = GradeBand.objects.all()
    serializer_class = GradeBandSerializer


class PercentQuerySerializer(serializers.Serializer):
    percent = serializers.DecimalField(max_digits=None, decimal_places=None)


class ResolveGradeView(APIView):
    """GET /api/grade/?percent=72.5"""
    def get(self, request):
        ser = PercentQuerySerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        grade = resolve_grade(ser.validated_data["percent"], GradeStore().grade_bands())
        return Response({"grade_point": float(grade.point), "grade_letter": grade.letter})


class CourseSummaryView(APIView):
    def get(self, request, student_id: int, course_offering_id: int):
        _student_or_404(student_id)
        store = GradeStore()
        offering = store.offering(course_offering_id)
        if offering is None:
            raise NotFound("course offering not found")
        g = course_grade(store, offering, student_id)
        return Response({
            "course_percent": float(g.percent),
            "grade_point": float(g.point),
            "grade_letter": g.letter,
            "credits": float(g.credits),
        })


class SemesterGpaView(APIView):
    def get(self, request, student_id: int, semester_id: int):
        _student_or_404(student_id)
        if not Semester.objects.filter(id=semester_id).exists():
            raise NotFound("semester not found")
        result = compute_gpa(GradeStore(), student_id, GpaScope.semester(semester_id))
        return Response({"gpa": float(result.gpa), "total_credits": float(result.total_credits)})


class CgpaView(APIView):
    def get(self, request, student_id: int):
        _student_or_404(student_id)
        result = compute_gpa(GradeStore(), student_id, ALL_SEMESTERS)
        return Response({"cgpa": float(result.gpa), "total_credits": float(result.total_credits)})


class TranscriptView(APIView):
    def get(self, request, student_id: int):
        _student_or_404(student_id)
        return Response(student_transcript(GradeStore(), student_id))
