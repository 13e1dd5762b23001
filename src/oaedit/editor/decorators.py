"""
Editor decorators for guarding operations on the loaded document.
"""

from functools import wraps
from typing import Any, Callable, TypeVar

from oaedit.editor.errors import NoDocumentError

T = TypeVar("T")


def require_document(operation: str) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator that raises NoDocumentError unless `self.document` is loaded."""

    def decorator(method: Callable[..., T]) -> Callable[..., T]:
        @wraps(method)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> T:
            if getattr(self, "document", None) is None:
                raise NoDocumentError(operation)
            return method(self, *args, **kwargs)

        return wrapper

    return decorator
