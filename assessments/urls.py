from rest_framework.routers import DefaultRouter
from .views import AssessmentViewSet, MarkViewSet

router = DefaultRouter()  # trailing slash par défaut
router.register(r"assessments", AssessmentViewSet, basename="assessments")
router.register(r"marks", MarkViewSet, basename="marks")
urlpatterns = router.urls
