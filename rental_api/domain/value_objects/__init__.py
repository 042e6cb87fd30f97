"""Value Objects del dominio de reservas."""

from rental_api.domain.value_objects.datetime_range import DatetimeRange
from rental_api.domain.value_objects.money import Money

__all__ = [
    "DatetimeRange",
    "Money",
]
