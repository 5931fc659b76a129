"""
Core views - Prometheus metrics exposition.
"""
from django.http import HttpResponse
from django.views import View
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest


class MetricsView(View):
    """
    GET /metrics

    Prometheus text exposition of the default registry. Left unauthenticated
    for the scraper; restrict at the ingress.
    """

    def get(self, request):
        return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)
