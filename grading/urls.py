from django.urls import path
from rest_framework.routers import DefaultRouter
from .views import (
    GradeBandViewSet, ResolveGradeView, CourseSummaryView,
    SemesterGpaView, CgpaView, TranscriptView,
)

router = DefaultRouter()
router.register(r"grade-scale", GradeBandViewSet, basename="grade-scale")

urlpatterns = [
    path("grade/", ResolveGradeView.as_view(), name="grade-resolve"),
    path("student/<int:student_id>/course/<int:course_offering_id>/summary/",
         CourseSummaryView.as_view(), name="student-course-summary"),
    path("student/<int:student_id>/semester/<int:semester_id>/gpa/",
         SemesterGpaView.as_view(), name="student-semester-gpa"),
    path("student/<int:student_id>/cgpa/", CgpaView.as_view(), name="student-cgpa"),
    path("student/<int:student_id>/transcript/", TranscriptView.as_view(), name="student-transcript"),
] + router.urls
