from django.conf import settings
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView

from apps.core.views import health_check, readiness_check


urlpatterns = [
    path("admin/", admin.site.urls),

    # Health probes
    path("health/", health_check, name="health-check"),
    path("ready/", readiness_check, name="readiness-check"),

    path("api/v1/auth/", include("apps.authentication.urls")),
    path("api/v1/employees/", include("apps.employees.urls")),
    path("api/v1/attendance/", include("apps.attendance.urls")),
    path("api/v1/leave/", include("apps.leave.urls")),
    path("api/v1/payroll/", include("apps.payroll.urls")),
    path("api/v1/recruitment/", include("apps.recruitment.urls")),
    path("api/v1/workflows/", include("apps.workflows.urls")),
    path("api/v1/reports/", include("apps.reports.urls")),
]

if getattr(settings, "ENABLE_API_DOCS", False):
    urlpatterns += [
        path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
        path(
            "api/docs/",
            SpectacularSwaggerView.as_view(url_name="schema"),
            name="swagger-ui",
        ),
        path(
            "api/redoc/",
            SpectacularRedocView.as_view(url_name="schema"),
            name="redoc",
        ),
    ]
