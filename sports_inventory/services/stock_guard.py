"""Post-mutation check that keeps ``Equipment.quantity`` non-negative.

Callers run :func:`validate_stock` inside the same ``atomic`` block as the
write it checks, so a failure rolls the whole unit back before the
``InvariantViolation`` reaches them.
"""

from __future__ import annotations

import logging

from ..core.errors import InvariantViolation
from ..models.equipment import Equipment

logger = logging.getLogger(__name__)


def validate_stock(equipment: Equipment) -> None:
    quantity = equipment.quantity
    if quantity is not None and quantity >= 0:
        return
    logger.error(
        "stock.invariant_violation",
        extra={"extra_data": {"equipment_id": equipment.id, "quantity": quantity}},
    )
    raise InvariantViolation(
        "Quantity cannot be negative",
        details={"equipment_id": equipment.id, "quantity": quantity},
    )
