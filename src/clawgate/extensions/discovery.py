"""Entry-point discovery shared by the plugin loader and the channel lister."""

from collections.abc import Callable, Iterator
from importlib import metadata as importlib_metadata
from typing import Any, Protocol


class ExtensionLogger(Protocol):
    def debug(self, message: str, **kwargs: Any) -> None: ...
    def info(self, message: str, **kwargs: Any) -> None: ...
    def warning(self, message: str, **kwargs: Any) -> None: ...
    def error(self, message: str, **kwargs: Any) -> None: ...


class SilentLogger:
    """Logger that drops everything; schema requests must not spam plugin logs."""

    def debug(self, message: str, **kwargs: Any) -> None:
        pass

    def info(self, message: str, **kwargs: Any) -> None:
        pass

    def warning(self, message: str, **kwargs: Any) -> None:
        pass

    def error(self, message: str, **kwargs: Any) -> None:
        pass


def load_entry_point_objects(
    group: str,
    build: Callable[[Any, str], Any],
    on_error: Callable[[str, Exception], None],
) -> Iterator[Any]:
    """Load every entry point in ``group`` and pass it through ``build``.

    The loaded object may be the descriptor itself, a mapping, or a zero-arg
    callable returning either. Failures go to ``on_error`` and are skipped.
    """
    for ep in importlib_metadata.entry_points().select(group=group):
        source = f"entry_point:{ep.value}"
        try:
            obj = ep.load()
            if callable(obj):
                obj = obj()
            yield build(obj, source)
        except Exception as e:
            on_error(source, e)
