"""Value Object DatetimeRange - intervalo semiabierto [start, end) de una reserva."""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from rental_api.domain.constants import SECONDS_PER_DAY


@dataclass(frozen=True)
class DatetimeRange:
    """
    Value Object inmutable que representa un intervalo semiabierto [start, end).

    Attributes:
        start: Instante de inicio (incluido).
        end: Instante de fin (excluido).
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ValueError(
                f"start debe ser anterior a end: {self.start} >= {self.end}"
            )

    @property
    def duration(self) -> timedelta:
        """Retorna la duración del rango."""
        return self.end - self.start

    @property
    def days(self) -> int:
        """
        Calcula los días facturables.

        Regla de negocio: cualquier fracción de día cuenta como día completo.
        Ejemplo: 25 horas = 2 días.
        """
        return max(1, math.ceil(self.duration.total_seconds() / SECONDS_PER_DAY))

    def overlaps_with(self, other: "DatetimeRange") -> bool:
        """
        Verifica si este rango se superpone con otro.

        Los extremos que se tocan (end == other.start) no se superponen.
        """
        return self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        return f"{self.start.isoformat()} -> {self.end.isoformat()}"
