"""Sources for the effective puzzle date."""

from __future__ import annotations

import os
import re
from datetime import date as Date
from datetime import datetime
from typing import Callable, Optional, Protocol
from urllib.parse import parse_qsl, unquote, urlsplit

from ..core.constants import DATE_FORMAT
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

ALLOW_FUTURE_DATES_ENV = "GAMECORNER_ALLOW_FUTURE_DATES"
DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class DateProvider(Protocol):
    def today(self) -> Date:
        """Return the date whose puzzles should be served."""


class SystemDateProvider:
    def today(self) -> Date:
        return Date.today()


class FixedDateProvider:
    def __init__(self, fixed: Date) -> None:
        self.fixed = fixed

    def today(self) -> Date:
        return self.fixed


def parse_date(text: Optional[str]) -> Optional[Date]:
    """Parse a strict ``YYYY-MM-DD`` string, returning ``None`` otherwise."""

    if not text or not DATE_RE.match(text.strip()):
        return None
    try:
        return datetime.strptime(text.strip(), DATE_FORMAT).date()
    except ValueError:
        return None


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes"}


class RequestDateProvider:
    """Lets a request URL replay an earlier day's puzzles.

    The date comes from ``?date=YYYY-MM-DD`` or, failing that, a trailing
    ``/YYYY-MM-DD`` path segment (only when the path has more than one
    segment). Requested dates later than the clock's date are clamped unless
    ``allow_future_dates`` is set.
    """

    def __init__(
        self,
        url: str,
        clock: Optional[Callable[[], Date]] = None,
        allow_future_dates: bool = False,
    ) -> None:
        self.url = url
        self.clock = clock or Date.today
        self.allow_future_dates = allow_future_dates

    @classmethod
    def from_env(cls, url: str, clock: Optional[Callable[[], Date]] = None) -> "RequestDateProvider":
        return cls(url, clock=clock, allow_future_dates=_env_flag(ALLOW_FUTURE_DATES_ENV))

    def today(self) -> Date:
        today = self.clock()
        parts = urlsplit(self.url)

        for key, value in parse_qsl(parts.query):
            if key.lower() == "date":
                requested = parse_date(value)
                if requested is not None:
                    return self._clamp(requested, today)

        segments = [segment for segment in parts.path.strip("/").split("/") if segment]
        if len(segments) > 1:
            requested = parse_date(unquote(segments[-1]))
            if requested is not None:
                return self._clamp(requested, today)
        return today

    def _clamp(self, requested: Date, today: Date) -> Date:
        if self.allow_future_dates or requested <= today:
            return requested
        LOGGER.info("Clamping future date %s to %s", requested, today)
        return today
