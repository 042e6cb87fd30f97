"""
Validador de rangos de fechas.

Reglas, en orden (la primera que falla corta la validación):
1. start y end son instantes válidos       -> InvalidFormatError
2. start > now (estrictamente futuro)       -> StartNotInFutureError
3. end > start                              -> EndBeforeStartError
4. ceil((end - start) / 1 día) <= max_days  -> SpanTooLongError
"""

import math
from datetime import datetime, timezone

from rental_api.domain.constants import MAX_BOOKING_DAYS, SECONDS_PER_DAY
from rental_api.domain.errors import (
    EndBeforeStartError,
    InvalidFormatError,
    SpanTooLongError,
    StartNotInFutureError,
)
from rental_api.domain.value_objects.datetime_range import DatetimeRange


def parse_instant(value: datetime | str | None, field: str) -> datetime:
    """
    Convierte un datetime o texto ISO-8601 en un instante UTC.

    Los valores sin zona horaria se interpretan como UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            raise InvalidFormatError(field=field, value=value) from None
    else:
        raise InvalidFormatError(field=field, value=value)

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def day_count(start: datetime, end: datetime) -> int:
    """Días facturables: ceil((end - start) / 1 día), mínimo 1."""
    seconds = (end - start).total_seconds()
    return max(1, math.ceil(seconds / SECONDS_PER_DAY))


def validate_dates(
    start: datetime | str | None,
    end: datetime | str | None,
    now: datetime,
    max_days: int = MAX_BOOKING_DAYS,
) -> DatetimeRange:
    """
    Valida el intervalo [start, end) contra el reloj inyectado.

    Returns:
        DatetimeRange normalizado a UTC.

    Raises:
        DateRangeError: la primera regla incumplida.
    """
    start_dt = parse_instant(start, "start_date")
    end_dt = parse_instant(end, "end_date")
    now_dt = parse_instant(now, "now")

    if start_dt <= now_dt:
        raise StartNotInFutureError(start=start_dt.isoformat(), now=now_dt.isoformat())

    if end_dt <= start_dt:
        raise EndBeforeStartError(start=start_dt.isoformat(), end=end_dt.isoformat())

    days = day_count(start_dt, end_dt)
    if days > max_days:
        raise SpanTooLongError(days=days, max_days=max_days)

    return DatetimeRange(start=start_dt, end=end_dt)
