"""Value Object Money - representa un valor monetario con su moneda."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """
    Value Object inmutable que representa un monto monetario.

    Attributes:
        amount: Monto decimal (redondeado a 2 decimales).
        currency_code: Código ISO 4217 de la moneda (ej: EUR, USD, XOF).
    """

    amount: Decimal
    currency_code: str

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))
        object.__setattr__(self, "amount", self.amount.quantize(CENTS, rounding=ROUND_HALF_UP))

        if len(self.currency_code) != 3:
            raise ValueError(f"currency_code debe ser de 3 caracteres: {self.currency_code}")

        if self.amount < 0:
            raise ValueError(f"amount no puede ser negativo: {self.amount}")

    def times(self, factor: int) -> "Money":
        """Multiplica el monto por un número entero de unidades (ej: días)."""
        if factor < 0:
            raise ValueError(f"factor no puede ser negativo: {factor}")
        return Money(amount=self.amount * factor, currency_code=self.currency_code)
