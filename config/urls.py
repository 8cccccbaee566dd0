from django.contrib import admin
from django.urls import path, include

from accounts.views import HealthView

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/health/", HealthView.as_view(), name="health"),
    path("api/", include("accounts.urls")),
    path("api/", include("core.urls")),
    path("api/", include("subjects.urls")),
    path("api/", include("assessments.urls")),
    path("api/", include("grading.urls")),
]
