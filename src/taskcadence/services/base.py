"""BaseService — shared foundation for taskcadence services.

Every service receives the invocation's :class:`CadenceSettings` at
construction time and resolves "now" through it, so a pinned
``[schedule] today`` applies uniformly to every operation.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Any

from taskcadence.domain.dates import parse_date
from taskcadence.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from taskcadence.config.settings import CadenceSettings
    from taskcadence.domain.errors import RecurrenceError

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ScheduleService(BaseService):
            def next_date(self, date: str, repeat: str) -> ServiceResult:
                now = self._resolve_now(None)
                ...
    """

    def __init__(self, settings: CadenceSettings) -> None:
        self._settings = settings

    def _resolve_now(self, now: str | None) -> date:
        """Parse an explicit *now*, or fall back to the settings' reference date.

        Raises:
            InvalidDateError: *now* is given but malformed.
        """
        if now:
            return parse_date(now, field="now")
        return self._settings.reference_date()

    @staticmethod
    def _reject(op: str, exc: RecurrenceError, **detail: Any) -> ServiceResult:
        logger.debug("%s rejected: %s (%s)", op, exc, exc.code)
        return ServiceResult(ok=False, op=op, error=ServiceError.from_exception(exc, **detail))
