"""
Query cache with optimistic updates.

QueryCache keys cached values by a query key (a tuple/list such as
('labs', lab_id)) on top of Django's cache framework. Invalidating a key
marks it stale without dropping the value, so readers can still serve it
while reconciling with the database.

OptimisticUpdate wraps a mutation:

1. snapshot the cached value for the query key
2. commit updater(snapshot, variables) to the cache
3. run the mutation
4. on failure restore the snapshot and re-raise
5. on settlement (success or failure) invalidate the key

There is no conflict resolution beyond last-writer-wins snapshot/restore.
"""
from typing import Any, Callable, Generic, Optional, Sequence, TypeVar, Union

from django.core.cache import cache as default_cache

from apps.core.observability import get_sanitized_logger, metrics

logger = get_sanitized_logger(__name__)

TData = TypeVar('TData')
TVariables = TypeVar('TVariables')

QueryKey = Union[str, Sequence[Any]]

KEY_PREFIX = 'query'
_MISSING = object()


def build_cache_key(query_key: QueryKey) -> str:
    if isinstance(query_key, str):
        parts = [query_key]
    else:
        parts = [str(part) for part in query_key]
    return ':'.join([KEY_PREFIX, *parts])


class QueryCache:
    """Cached query data with a stale marker per key."""

    def __init__(self, backend=None, timeout=None):
        self.backend = backend if backend is not None else default_cache
        self.timeout = timeout

    def _stale_key(self, key):
        return f'{key}:stale'

    def get_query_data(self, query_key: QueryKey, default=None):
        value = self.backend.get(build_cache_key(query_key), _MISSING)
        return default if value is _MISSING else value

    def has_query_data(self, query_key: QueryKey) -> bool:
        return self.backend.get(build_cache_key(query_key), _MISSING) is not _MISSING

    def set_query_data(self, query_key: QueryKey, value_or_updater):
        """
        Store a value, or the result of updater(old_value) if callable.

        Storing fresh data clears the stale marker.
        """
        key = build_cache_key(query_key)
        if callable(value_or_updater):
            value = value_or_updater(self.get_query_data(query_key))
        else:
            value = value_or_updater

        self.backend.set(key, value, timeout=self.timeout)
        self.backend.delete(self._stale_key(key))
        return value

    def invalidate_queries(self, query_key: QueryKey):
        """Mark cached data stale so the next reader refetches it."""
        key = build_cache_key(query_key)
        self.backend.set(self._stale_key(key), True, timeout=self.timeout)

    def is_stale(self, query_key: QueryKey) -> bool:
        return bool(self.backend.get(self._stale_key(build_cache_key(query_key)), False))

    def remove_queries(self, query_key: QueryKey):
        key = build_cache_key(query_key)
        self.backend.delete_many([key, self._stale_key(key)])


query_cache = QueryCache()


class OptimisticUpdate(Generic[TData, TVariables]):
    """
    Apply a cache update before a mutation resolves, rolling back on failure.

    Usage:
        update = OptimisticUpdate(
            mutation_fn=save_status,
            query_key=('labs', lab.id),
            updater=lambda old, status: {**(old or {}), 'status': status},
        )
        update.mutate('COMPLETED')
    """

    def __init__(
        self,
        mutation_fn: Callable[[TVariables], TData],
        query_key: QueryKey,
        updater: Callable[[Optional[Any], TVariables], Any],
        on_success: Optional[Callable[[TData], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
        cache: Optional[QueryCache] = None,
    ):
        self.mutation_fn = mutation_fn
        self.query_key = query_key
        self.updater = updater
        self.on_success = on_success
        self.on_error = on_error
        self.cache = cache if cache is not None else query_cache

    def _on_mutate(self, variables):
        """Snapshot the previous value and commit the optimistic one."""
        had_previous = self.cache.has_query_data(self.query_key)
        previous = self.cache.get_query_data(self.query_key)
        self.cache.set_query_data(self.query_key, lambda old: self.updater(old, variables))
        return had_previous, previous

    def _rollback(self, had_previous, previous):
        if had_previous:
            self.cache.set_query_data(self.query_key, previous)
        else:
            self.cache.remove_queries(self.query_key)

    def mutate(self, variables: TVariables) -> TData:
        had_previous, previous = self._on_mutate(variables)
        try:
            try:
                data = self.mutation_fn(variables)
            except Exception as exc:
                self._rollback(had_previous, previous)
                metrics.optimistic_updates_total.labels(result='rolled_back').inc()
                logger.warning(
                    'Optimistic update rolled back',
                    extra={
                        'event': 'optimistic_update_rolled_back',
                        'query_key': build_cache_key(self.query_key),
                        'error_type': exc.__class__.__name__,
                    }
                )
                if self.on_error:
                    self.on_error(exc)
                raise

            metrics.optimistic_updates_total.labels(result='committed').inc()
            if self.on_success:
                self.on_success(data)
            return data
        finally:
            # Always refetch after error or success
            self.cache.invalidate_queries(self.query_key)
