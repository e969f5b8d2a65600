from django.contrib import admin
from django.urls import path, include


urlpatterns = [
    # DJANGO ADMIN (STAFF ONLY)
    path("agriland/django/admin/", admin.site.urls),

    # JSON API
    path("api/notifications/", include("notifications.urls")),
]
