from django.contrib import admin
from django.urls import path, re_path, include

from onepoint.views import api_not_found, api_root, health

urlpatterns = [
    path("admin/", admin.site.urls),

    path("api/", api_root, name="api-root"),
    path("api/health/", health, name="health"),

    path("api/", include("users.urls")),  # auth, profile, admin users
    path("api/", include("catalog.urls")),
    path("api/", include("bookings.urls")),  # bookings, admin bookings, dashboard
    path("api/", include("payments.urls")),

    re_path(r"^api/.*$", api_not_found, name="api-not-found"),
]
