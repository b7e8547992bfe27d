from django.urls import path

from .views import (
    ServiceByCodeView,
    ServiceByIdView,
    ServiceCategoryListView,
    ServiceListView,
    ServicesByCategoryView,
    ServiceSeedAPIView,
)

urlpatterns = [
    path("services/", ServiceListView.as_view(), name="service-list"),
    path("services/categories/", ServiceCategoryListView.as_view(), name="service-categories"),
    path("services/seed/", ServiceSeedAPIView.as_view(), name="service-seed"),
    path("services/category/<str:category>/", ServicesByCategoryView.as_view(), name="service-by-category"),
    path("services/id/<str:id>/", ServiceByIdView.as_view(), name="service-by-id"),
    path("services/<str:category>/<str:service_id>/", ServiceByCodeView.as_view(), name="service-by-code"),
]
