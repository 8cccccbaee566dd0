from rest_framework.routers import DefaultRouter
from .views import SubjectViewSet, CourseOfferingViewSet

router = DefaultRouter()
router.register(r"subjects", SubjectViewSet, basename="subjects")
router.register(r"course_offerings", CourseOfferingViewSet, basename="course-offerings")
urlpatterns = router.urls
