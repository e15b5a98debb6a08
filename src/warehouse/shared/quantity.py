import math

from protean.exceptions import ValidationError


def require_positive(quantity, field="quantity"):
    """Raise ValidationError unless ``quantity`` is a finite number greater than zero."""
    if isinstance(quantity, bool) or not isinstance(quantity, int | float):
        raise ValidationError({field: ["Quantity must be a number"]})
    if not math.isfinite(quantity):
        raise ValidationError({field: ["Quantity must be a finite number"]})
    if quantity <= 0:
        raise ValidationError({field: ["Quantity must be positive"]})
