"""Timing telemetry for service calls.

Near-zero overhead when disabled (single ContextVar.get per call).
When enabled via --verbose, each ``@traced`` call is timed, logged at
DEBUG, and its timing injected into ``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from contextvars import ContextVar
from typing import Any, ParamSpec, TypeVar

import structlog

from taskcadence.services.result import ServiceResult

_verbose_enabled: ContextVar[bool] = ContextVar("_verbose_enabled", default=False)

_P = ParamSpec("_P")
_R = TypeVar("_R")


def _inject_meta(result: ServiceResult, timing: dict[str, Any]) -> ServiceResult:
    """Merge timing into meta (ServiceResult is frozen, so copy)."""
    merged_meta = {**(result.meta or {}), "telemetry": timing}
    return result.model_copy(update={"meta": merged_meta})


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Decorator: time a service method and record the duration in meta."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _verbose_enabled.get():
            return func(*args, **kwargs)

        start = time.perf_counter()
        result = func(*args, **kwargs)
        timing = {
            "name": func.__qualname__,
            "duration_ms": round((time.perf_counter() - start) * 1000, 3),
        }

        ok = True
        if isinstance(result, ServiceResult):
            ok = result.ok
            result = _inject_meta(result, timing)  # type: ignore[assignment]
        structlog.get_logger("taskcadence.telemetry").debug("call.complete", ok=ok, **timing)
        return result

    return wrapper


def enable_telemetry() -> None:
    """Enable verbose telemetry (called by AppContext at startup)."""
    _verbose_enabled.set(True)


def disable_telemetry() -> None:
    _verbose_enabled.set(False)


def telemetry_enabled() -> bool:
    return _verbose_enabled.get()
