from decimal import Decimal, InvalidOperation

from sqlalchemy import Numeric, String
from sqlalchemy.types import TypeDecorator

from shared.core.exceptions import ConstraintViolation, InvalidArgument


def check_fixed_precision(field: str, value, precision: int, scale: int) -> Decimal:
    """Coerce ``value`` to Decimal and make sure it fits NUMERIC(precision, scale).

    Floats go through ``str`` so that 0.1 stays 0.1.
    """
    if isinstance(value, bool):
        raise InvalidArgument(f"Field '{field}' expects a decimal, got a boolean")
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidArgument(
            f"Field '{field}' expects a decimal, got {value!r}") from None

    if not number.is_finite():
        raise InvalidArgument(f"Field '{field}' must be a finite number")

    _, digits, exponent = number.normalize().as_tuple()
    places = max(-exponent, 0)
    whole = max(len(digits) + exponent, 0) if number != 0 else 0

    if places > scale:
        raise ConstraintViolation(
            f"Field '{field}' allows at most {scale} fractional digits, got {places}")
    if whole > precision - scale:
        raise ConstraintViolation(
            f"Field '{field}' allows at most {precision - scale} integer digits, got {whole}")
    return number


class FixedDecimal(TypeDecorator):
    """NUMERIC(precision, scale) that round-trips exactly on every backend.

    SQLite has no fixed-point storage and would hand values back as floats,
    so there the value is kept as canonical text quantized to ``scale``.
    """

    impl = Numeric
    cache_ok = True

    def __init__(self, precision: int, scale: int):
        super().__init__(precision=precision, scale=scale, asdecimal=True)
        self.precision = precision
        self.scale = scale
        self.quantum = Decimal(1).scaleb(-scale)

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            # digits, sign and decimal point
            return dialect.type_descriptor(String(self.precision + 2))
        return dialect.type_descriptor(
            Numeric(self.precision, self.scale, asdecimal=True))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        value = Decimal(str(value)) if not isinstance(value, Decimal) else value
        value = value.quantize(self.quantum)
        if dialect.name == "sqlite":
            return format(value, "f")
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, Decimal):
            return value
        return Decimal(str(value))
