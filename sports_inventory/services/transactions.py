"""Recording a sale: the only code path that writes ``Transaction`` rows.

The flow for :func:`process_transaction`:

1. Reject non-positive quantities before touching the database.
2. Resolve the customer and lock the equipment row.
3. Fail fast with ``InsufficientStock`` when the stock on hand is too low.
4. Inside one ``atomic`` block, decrement stock with a conditional UPDATE
   (``... WHERE quantity >= :n``), insert the transaction row and run the
   stock guard on the refreshed equipment row.

Step 3 only saves work. Step 4 is what keeps two concurrent buyers of the last
unit from both succeeding: whichever UPDATE runs second matches no row and
the whole unit rolls back.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import update
from sqlalchemy.orm import Session

from ..core.errors import ConstraintViolation, InsufficientStock, InvalidArgument, InvariantViolation
from ..core.money import MAX_AMOUNT, quantize_currency
from ..crud.customers import get_customer
from ..crud.equipment import lock_equipment
from ..db.session import atomic
from ..models.equipment import Equipment
from ..models.transaction import Transaction
from .stock_guard import validate_stock

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Transaction Processed Successfully"


def compute_total_price(price: Decimal, quantity: int) -> Decimal:
    total = quantize_currency(Decimal(price) * quantity)
    if total > MAX_AMOUNT:
        raise ConstraintViolation(
            f"total_price exceeds {MAX_AMOUNT}",
            details={"price": str(price), "quantity": quantity},
        )
    return total


def process_transaction(db: Session, customer_id: int, equipment_id: int, quantity: int) -> Transaction:
    """Sell ``quantity`` units of equipment to a customer.

    Returns the persisted ``Transaction``. Raises ``InvalidArgument`` for a
    non-positive quantity, ``NotFound`` for an unknown customer or equipment
    and ``InsufficientStock`` when the sale would overdraw stock. Nothing is
    written on any failure.
    """

    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidArgument("quantity must be a positive integer", details={"quantity": quantity})

    try:
        with atomic(db):
            get_customer(db, customer_id)
            equipment = lock_equipment(db, equipment_id)
            available = equipment.quantity
            if available < quantity:
                raise InsufficientStock(equipment_id, quantity, available)

            total_price = compute_total_price(equipment.price, quantity)

            result = db.execute(
                update(Equipment)
                .where(Equipment.id == equipment_id, Equipment.quantity >= quantity)
                .values(quantity=Equipment.quantity - quantity)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                # Another sale committed between our read and this write.
                raise InsufficientStock(equipment_id, quantity)

            transaction = Transaction(
                customer_id=customer_id,
                equipment_id=equipment_id,
                quantity=quantity,
                total_price=total_price,
            )
            db.add(transaction)
            db.flush()
            db.refresh(equipment)
            validate_stock(equipment)
    except InvariantViolation as exc:
        _log_rejection(customer_id, equipment_id, quantity, reason="invariant_violation")
        raise InsufficientStock(equipment_id, quantity) from exc
    except InsufficientStock:
        _log_rejection(customer_id, equipment_id, quantity, reason="insufficient_stock")
        raise

    db.refresh(transaction)
    logger.info(
        "transaction.processed",
        extra={
            "extra_data": {
                "transaction_id": transaction.id,
                "customer_id": customer_id,
                "equipment_id": equipment_id,
                "quantity": quantity,
                "total_price": str(transaction.total_price),
                "result": SUCCESS_MESSAGE,
            }
        },
    )
    return transaction


def _log_rejection(customer_id: int, equipment_id: int, quantity: int, *, reason: str) -> None:
    logger.info(
        "transaction.rejected",
        extra={
            "extra_data": {
                "customer_id": customer_id,
                "equipment_id": equipment_id,
                "quantity": quantity,
                "reason": reason,
            }
        },
    )
