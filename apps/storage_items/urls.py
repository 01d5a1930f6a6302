"""URL routing for storage items."""

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import StorageItemViewSet

router = DefaultRouter()
router.register(r"", StorageItemViewSet, basename="storage-item")

urlpatterns = [path("", include(router.urls))]
