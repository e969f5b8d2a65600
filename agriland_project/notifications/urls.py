from django.urls import path

from notifications import views

app_name = "notifications"

urlpatterns = [
    path("harvest-check/", views.harvest_check, name="harvest-check"),
    path("stats/", views.stats, name="stats"),
    path("<int:pk>/read/", views.mark_read, name="mark-read"),
    path("<int:pk>/dismiss/", views.dismiss, name="dismiss"),
]
