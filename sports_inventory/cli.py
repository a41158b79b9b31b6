#!/usr/bin/env python3
"""
Command line access to the inventory database.

Commands:
  init-db                       create any missing tables
  seed                          load the five-rows-per-table demo dataset
  add-equipment NAME            --quantity N --price P [--category-id ID]
  purchase CUSTOMER EQUIPMENT QUANTITY
  penalty-total CUSTOMER
  transactions CUSTOMER         [--newest-first | --oldest-first]

Examples:
  sports-inventory init-db
  sports-inventory add-equipment "Tennis Racket" --category-id 3 --quantity 5 --price 1500.00
  sports-inventory purchase 1 1 2
  DATABASE_URL=sqlite:///tmp/demo.db sports-inventory penalty-total 1

Output is JSON on stdout.

Exit codes:
  0 = success
  1 = handled inventory error (not found, insufficient stock, ...)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Callable, Sequence

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .core.errors import InventoryError
from .core.logging import configure_logging
from .crud.equipment import add_equipment
from .db.seed import seed_sample_data
from .db.session import SessionLocal, init_db, sqlite_connect_args
from .schemas.equipment import EquipmentOut
from .schemas.transaction import TransactionOut
from .services.penalties import get_customer_transactions, get_total_penalty
from .services.transactions import SUCCESS_MESSAGE, process_transaction


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="sports-inventory", description="Sports equipment inventory tools.")
    p.add_argument("--database-url", default=None,
                   help="SQLAlchemy URL. Defaults to DATABASE_URL / the configured SQLite file.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level to stderr.")
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create missing tables.")
    sub.add_parser("seed", help="Load the demo dataset into an empty database.")

    add = sub.add_parser("add-equipment", help="Add a stocked item.")
    add.add_argument("name")
    add.add_argument("--category-id", type=int, default=None)
    add.add_argument("--quantity", type=int, required=True)
    add.add_argument("--price", required=True, help="Unit price, e.g. 1500.00")

    buy = sub.add_parser("purchase", help="Record a sale and decrement stock.")
    buy.add_argument("customer_id", type=int)
    buy.add_argument("equipment_id", type=int)
    buy.add_argument("quantity", type=int)

    total = sub.add_parser("penalty-total", help="Total penalties for a customer.")
    total.add_argument("customer_id", type=int)

    history = sub.add_parser("transactions", help="List a customer's transactions.")
    history.add_argument("customer_id", type=int)
    order = history.add_mutually_exclusive_group()
    order.add_argument("--newest-first", dest="newest_first", action="store_true", default=None)
    order.add_argument("--oldest-first", dest="newest_first", action="store_false")
    return p.parse_args(argv)


def _session_factory(database_url: str | None) -> Callable[[], Session]:
    if not database_url:
        return SessionLocal
    engine = create_engine(database_url, connect_args=sqlite_connect_args(database_url))
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def _dump(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))


def run(args: argparse.Namespace, db: Session) -> Any:
    init_db(db.get_bind())
    if args.command == "init-db":
        return {"status": "ok"}
    if args.command == "seed":
        return {"status": "loaded" if seed_sample_data(db) else "skipped"}
    if args.command == "add-equipment":
        equipment = add_equipment(
            db,
            name=args.name,
            category_id=args.category_id,
            quantity=args.quantity,
            price=args.price,
        )
        return EquipmentOut.model_validate(equipment, from_attributes=True).model_dump(mode="json")
    if args.command == "purchase":
        transaction = process_transaction(db, args.customer_id, args.equipment_id, args.quantity)
        return {
            "message": SUCCESS_MESSAGE,
            "transaction": TransactionOut.model_validate(transaction, from_attributes=True).model_dump(mode="json"),
        }
    if args.command == "penalty-total":
        return {"customer_id": args.customer_id, "total": str(get_total_penalty(db, args.customer_id))}
    if args.command == "transactions":
        history = get_customer_transactions(db, args.customer_id, newest_first=args.newest_first)
        return [
            TransactionOut.model_validate(row, from_attributes=True).model_dump(mode="json")
            for row in history
        ]
    raise ValueError(f"unknown command: {args.command}")


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging("DEBUG" if args.verbose else "WARNING", json_output=False)
    db = _session_factory(args.database_url)()
    try:
        _dump(run(args, db))
    except InventoryError as exc:
        logging.getLogger(__name__).debug("command failed", exc_info=True)
        _dump({"code": exc.code, "message": exc.message, "details": exc.details})
        return 1
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
