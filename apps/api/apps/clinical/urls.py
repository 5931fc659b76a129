"""
Clinical URLs - Lab results.
"""
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import LabResultViewSet

router = DefaultRouter()
router.register(r'labs', LabResultViewSet, basename='lab-result')

urlpatterns = [
    path('', include(router.urls)),
]
