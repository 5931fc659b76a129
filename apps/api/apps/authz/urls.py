"""
Authz URLs - current user and navigation
"""
from django.urls import path

from .views import CurrentUserView, NavigationView

urlpatterns = [
    path('auth/me/', CurrentUserView.as_view(), name='current-user'),
    path('auth/navigation/', NavigationView.as_view(), name='navigation'),
]
