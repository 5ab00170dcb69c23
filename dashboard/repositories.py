"""
Persistence port for the form actions.

Each method issues exactly one SQL statement with every user-supplied value
passed as a bound parameter, and returns the number of affected rows.
Driver failures surface as PersistenceError.
"""

from __future__ import annotations

import logging
from typing import Sequence

from django.db import DatabaseError, connections

from .validation.errors import PersistenceError

logger = logging.getLogger(__name__)


class SqlRepository:
    table: str = ""

    def __init__(self, using: str = "default"):
        self.using = using

    def execute(self, operation: str, sql: str, params: Sequence) -> int:
        try:
            with connections[self.using].cursor() as cursor:
                cursor.execute(sql, params)
                return cursor.rowcount
        except DatabaseError as e:
            raise PersistenceError(operation, self.table) from e


class InvoiceRepository(SqlRepository):
    table = "invoices"

    def insert(self, customer_id: str, amount: int, status: str, date: str) -> int:
        return self.execute(
            "insert",
            "INSERT INTO invoices (customer_id, amount, status, date) VALUES (%s, %s, %s, %s)",
            [customer_id, amount, status, date],
        )

    def update(self, invoice_id: str, customer_id: str, amount: int, status: str) -> int:
        return self.execute(
            "update",
            "UPDATE invoices SET customer_id = %s, amount = %s, status = %s WHERE id = %s",
            [customer_id, amount, status, invoice_id],
        )

    def delete(self, invoice_id: str) -> int:
        rows = self.execute("delete", "DELETE FROM invoices WHERE id = %s", [invoice_id])
        if rows == 0:
            logger.info("Delete of invoice %s matched no rows", invoice_id)
        return rows


class UserRepository(SqlRepository):
    table = "users"

    def insert(self, name: str, email: str, hashed_password: str) -> int:
        return self.execute(
            "insert",
            "INSERT INTO users (name, email, password) VALUES (%s, %s, %s)",
            [name, email, hashed_password],
        )
