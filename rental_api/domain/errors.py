"""Excepciones de dominio para el sistema de reservas."""


class DomainError(Exception):
    """Clase base para todos los errores de dominio."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class BookingError(DomainError):
    """Base de los errores del motor de validación de reservas."""


# === Errores de fechas ===


class DateRangeError(BookingError):
    """Rango de fechas inválido."""


class InvalidFormatError(DateRangeError):
    """Alguna de las fechas no es un instante válido."""

    def __init__(self, field: str, value: object):
        super().__init__(
            message=f"Formato de fecha inválido en '{field}': {value!r}",
            code="INVALID_FORMAT",
        )
        self.field = field
        self.value = value


class StartNotInFutureError(DateRangeError):
    """La fecha de inicio no es estrictamente futura."""

    def __init__(self, start: object, now: object):
        super().__init__(
            message=f"La fecha de inicio debe estar en el futuro: {start} <= {now}",
            code="START_NOT_IN_FUTURE",
        )
        self.start = start
        self.now = now


class EndBeforeStartError(DateRangeError):
    """La fecha de fin no es posterior a la de inicio."""

    def __init__(self, start: object, end: object):
        super().__init__(
            message=f"La fecha de fin debe ser posterior a la de inicio: {end} <= {start}",
            code="END_BEFORE_START",
        )
        self.start = start
        self.end = end


class SpanTooLongError(DateRangeError):
    """La reserva excede el máximo de días permitido."""

    def __init__(self, days: int, max_days: int):
        super().__init__(
            message=f"La reserva no puede exceder {max_days} días (solicitados: {days})",
            code="SPAN_TOO_LONG",
        )
        self.days = days
        self.max_days = max_days


# === Errores de selección de servicio ===


class ServiceSelectionError(BookingError):
    """La reserva no referencia exactamente un servicio."""


class NoServiceSpecifiedError(ServiceSelectionError):
    def __init__(self) -> None:
        super().__init__(
            message="Una reserva debe incluir un servicio (residencia, vehículo u oferta)",
            code="NO_SERVICE_SPECIFIED",
        )


class MultipleServicesSpecifiedError(ServiceSelectionError):
    def __init__(self, kinds: list[str]):
        super().__init__(
            message=f"Una reserva solo puede incluir un tipo de servicio: {', '.join(kinds)}",
            code="MULTIPLE_SERVICES_SPECIFIED",
        )
        self.kinds = kinds


# === Errores de disponibilidad ===


class AvailabilityError(BookingError):
    """El recurso no puede reservarse."""


class ResourceNotFoundError(AvailabilityError):
    """El recurso solicitado no existe."""

    def __init__(self, kind: str, resource_id: str):
        super().__init__(
            message=f"Recurso no encontrado: {kind} {resource_id}",
            code="RESOURCE_NOT_FOUND",
        )
        self.kind = kind
        self.resource_id = resource_id


class ResourceUnavailableError(AvailabilityError):
    """El recurso existe pero está inactivo."""

    def __init__(self, kind: str, resource_id: str):
        super().__init__(
            message=f"El recurso {kind} {resource_id} no está disponible",
            code="RESOURCE_UNAVAILABLE",
        )
        self.kind = kind
        self.resource_id = resource_id


class ResourceNotAvailableError(AvailabilityError):
    """Conflicto con una reserva existente en el mismo intervalo."""

    def __init__(self, kind: str, resource_id: str, conflicting_booking_id: str | None = None):
        super().__init__(
            message=f"El recurso {kind} {resource_id} no está disponible para las fechas seleccionadas",
            code="RESOURCE_NOT_AVAILABLE",
        )
        self.kind = kind
        self.resource_id = resource_id
        self.conflicting_booking_id = conflicting_booking_id


class OfferNotCurrentlyValidError(AvailabilityError):
    """La oferta está fuera de su ventana de validez."""

    def __init__(self, offer_id: str, valid_from: object, valid_to: object):
        super().__init__(
            message=f"La oferta {offer_id} no es válida en este momento ({valid_from} -> {valid_to})",
            code="OFFER_NOT_CURRENTLY_VALID",
        )
        self.offer_id = offer_id
        self.valid_from = valid_from
        self.valid_to = valid_to


class ResourceInUseError(DomainError):
    """El recurso tiene reservas activas y no puede darse de baja."""

    def __init__(self, kind: str, resource_id: str, active_bookings: int):
        super().__init__(
            message=f"El recurso {kind} {resource_id} tiene {active_bookings} reservas activas",
            code="RESOURCE_IN_USE",
        )
        self.kind = kind
        self.resource_id = resource_id
        self.active_bookings = active_bookings


# === Errores de precio ===


class PriceError(BookingError):
    """No se pudo resolver el precio."""


class PriceUnresolvableError(PriceError):
    def __init__(self, reason: str):
        super().__init__(
            message=f"Imposible calcular el precio: {reason}",
            code="PRICE_UNRESOLVABLE",
        )
        self.reason = reason


# === Errores de reserva persistida ===


class BookingNotFoundError(DomainError):
    """La reserva no existe."""

    def __init__(self, booking_id: str):
        super().__init__(
            message=f"Reserva no encontrada: {booking_id}",
            code="BOOKING_NOT_FOUND",
        )
        self.booking_id = booking_id


class BookingAlreadyExistsError(DomainError):
    """Ya existe una reserva con el mismo id o código público."""

    def __init__(self, booking_id: str, booking_code: str):
        super().__init__(
            message=f"Ya existe una reserva con id {booking_id} o código {booking_code}",
            code="BOOKING_ALREADY_EXISTS",
        )
        self.booking_id = booking_id
        self.booking_code = booking_code


class InvalidBookingStatusError(DomainError):
    """El estado de la reserva no permite la operación."""

    def __init__(self, current_status: str, expected_status: str | list[str], operation: str):
        expected = expected_status if isinstance(expected_status, str) else ", ".join(expected_status)
        super().__init__(
            message=f"No se puede {operation}: estado actual '{current_status}', esperado '{expected}'",
            code="INVALID_BOOKING_STATUS",
        )
        self.current_status = current_status
        self.expected_status = expected_status
        self.operation = operation


class OptimisticLockError(DomainError):
    """Conflicto de concurrencia al actualizar la reserva."""

    def __init__(self, booking_id: str, expected_version: int):
        super().__init__(
            message=f"Conflicto de concurrencia en reserva {booking_id}: "
            f"versión esperada {expected_version}",
            code="OPTIMISTIC_LOCK_ERROR",
        )
        self.booking_id = booking_id
        self.expected_version = expected_version


# === Errores de idempotencia ===


class IdempotencyConflictError(DomainError):
    """Conflicto de idempotencia: mismo key pero diferente request."""

    def __init__(self, idem_key: str, scope: str):
        super().__init__(
            message=f"Conflicto de idempotencia: key '{idem_key}' en scope '{scope}' "
            f"ya existe con diferente request hash",
            code="IDEMPOTENCY_CONFLICT",
        )
        self.idem_key = idem_key
        self.scope = scope


# === Errores de validación ===


class ValidationError(DomainError):
    """Error de validación de datos de entrada."""

    def __init__(self, field: str, message: str):
        super().__init__(
            message=f"Validación fallida en '{field}': {message}",
            code="VALIDATION_ERROR",
        )
        self.field = field
