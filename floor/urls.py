from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import views, views_api

# ==============================================================================
# DRF ROUTER
# ==============================================================================
router = DefaultRouter()
router.register(r"tables", views_api.TableViewSet, basename="table")
router.register(r"reservations", views_api.ReservationViewSet, basename="reservation")

# ==============================================================================
# URL PATTERNS
# ==============================================================================
app_name = "floor"

urlpatterns = [
    # --------------------------------------------------------------------------
    # PAGES
    # --------------------------------------------------------------------------
    path("", views.FloorBoardView.as_view(), name="board"),
    path(
        "tables/<int:table_id>/<str:action>/",
        views.TableActionView.as_view(),
        name="table-action",
    ),
    path("analytics/", views.analytics_page, name="analytics"),

    # --------------------------------------------------------------------------
    # API
    # --------------------------------------------------------------------------
    path("api/analytics", views_api.analytics, name="api-analytics"),
    path("api/", include(router.urls)),
]
