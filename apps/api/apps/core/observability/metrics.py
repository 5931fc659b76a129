"""
Metrics instrumentation (Prometheus client).
"""
from prometheus_client import Counter, Histogram


class MetricsRegistry:
    """
    Central metrics registry for the EHR portal.

    Provides typed access to all application metrics.
    """

    def __init__(self):
        """Initialize metrics registry."""
        self._setup_metrics()

    def _create_counter(self, name, description, labels=None):
        """Create a counter metric."""
        return Counter(name, description, labels or [])

    def _create_histogram(self, name, description, labels=None, buckets=None):
        """Create a histogram metric."""
        if buckets:
            return Histogram(name, description, labels or [], buckets=buckets)
        return Histogram(name, description, labels or [])

    def _setup_metrics(self):
        """Setup all application metrics."""

        # ===================================================================
        # HTTP Metrics
        # ===================================================================
        self.http_requests_total = self._create_counter(
            'http_requests_total',
            'Total HTTP requests',
            ['method', 'status']
        )

        self.http_request_duration_seconds = self._create_histogram(
            'http_request_duration_seconds',
            'HTTP request duration in seconds',
            ['method'],
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
        )

        self.exceptions_total = self._create_counter(
            'exceptions_total',
            'Total exceptions',
            ['exception_type', 'location']
        )

        # ===================================================================
        # Report Metrics
        # ===================================================================
        self.report_requests_total = self._create_counter(
            'report_requests_total',
            'Report requests',
            ['report', 'result']  # result: success|failure
        )

        self.report_query_duration_seconds = self._create_histogram(
            'report_query_duration_seconds',
            'Report query/aggregation duration',
            ['report'],
            buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0]
        )

        # ===================================================================
        # Lab Report Job Metrics
        # ===================================================================
        self.lab_report_jobs_enqueued_total = self._create_counter(
            'lab_report_jobs_enqueued_total',
            'Lab report jobs sent to the lab-reports queue'
        )

        self.lab_report_jobs_total = self._create_counter(
            'lab_report_jobs_total',
            'Lab report jobs processed',
            ['result']
        )

        self.lab_report_job_duration_seconds = self._create_histogram(
            'lab_report_job_duration_seconds',
            'Lab report generation duration',
            buckets=[0.5, 1.0, 2.0, 3.0, 4.0, 5.0, 10.0, 30.0]
        )

        # ===================================================================
        # Query Cache Metrics
        # ===================================================================
        self.optimistic_updates_total = self._create_counter(
            'optimistic_updates_total',
            'Optimistic cache updates',
            ['result']  # committed|rolled_back
        )


# Global metrics instance
metrics = MetricsRegistry()
