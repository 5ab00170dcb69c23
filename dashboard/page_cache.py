"""Cached renderings of dashboard pages, keyed by path."""

from __future__ import annotations

import hashlib
import logging
from functools import wraps
from typing import Any, Callable, Optional

from django.conf import settings
from django.core.cache import cache as default_cache
from django.http import HttpResponse

logger = logging.getLogger(__name__)

INVOICES_PATH = "/dashboard/invoices"


class PageCache:
    """
    Stores the rendered body of a page under a key derived from its path.
    ``revalidate_path`` drops that entry so the next request renders afresh.
    """

    KEY_PREFIX = "page"

    def __init__(self, backend: Any = None, timeout: Optional[int] = None):
        self.backend = backend if backend is not None else default_cache
        self.timeout = timeout

    @classmethod
    def make_key(cls, path: str) -> str:
        normalized = path.rstrip("/") or "/"
        return f"{cls.KEY_PREFIX}:" + hashlib.md5(normalized.encode()).hexdigest()

    def _timeout(self) -> int:
        if self.timeout is not None:
            return self.timeout
        return getattr(settings, "PAGE_CACHE_TIMEOUT", 3600)

    def get(self, path: str) -> Any:
        return self.backend.get(self.make_key(path))

    def store(self, path: str, value: Any) -> None:
        self.backend.set(self.make_key(path), value, self._timeout())

    def revalidate_path(self, path: str) -> None:
        self.backend.delete(self.make_key(path))
        logger.info("Revalidated cached page %s", path)

    def cached(self, path: str) -> Callable:
        """Decorator serving a view's successful responses from the cache for ``path``."""
        def decorator(view: Callable) -> Callable:
            @wraps(view)
            def wrapper(request, *args: Any, **kwargs: Any) -> HttpResponse:
                response = self.get(path)
                if response is not None:
                    return response

                response = view(request, *args, **kwargs)
                if response.status_code == 200:
                    self.store(path, response)
                return response

            return wrapper
        return decorator


page_cache = PageCache()
