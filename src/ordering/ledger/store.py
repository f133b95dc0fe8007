"""Append-only order ledger file.

One CSV row per confirmed order, under the header::

    orderId,timestamp,totalQty,subtotal,discount,gst,delivery,total,coupon

Amounts are written with two decimals (round half up). An order placed
without a promotion code is written with ``-`` in the coupon column.
"""

import csv
from datetime import datetime
from pathlib import Path
from typing import Protocol

import structlog
from protean.exceptions import DatabaseError, ValidationError

from ordering.ledger.record import OrderRecord
from shared.money import format_amount

logger = structlog.get_logger(__name__)

HEADER = ["orderId", "timestamp", "totalQty", "subtotal", "discount", "gst", "delivery", "total", "coupon"]
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
NO_COUPON = "-"


class OrderLedgerStore(Protocol):
    def read_all(self) -> list[OrderRecord]: ...

    def order_ids(self) -> list[int]: ...

    def append(self, record: OrderRecord) -> None: ...


def _parse_order_id(value: str) -> int | None:
    value = value.strip()
    if value.isascii() and value.isdigit() and int(value) > 0:
        return int(value)
    return None


class CsvOrderLedgerStore:
    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _rows(self) -> list[list[str]]:
        if not self.path.exists():
            return []
        try:
            with self.path.open(newline="", encoding="utf-8") as fh:
                return [row for row in csv.reader(fh) if row]
        except OSError as exc:
            raise DatabaseError(f"Cannot read {self.path}: {exc}", original_exception=exc) from exc

    def order_ids(self) -> list[int]:
        """Every valid order id in the file, header and junk rows skipped."""
        ids = []
        for row in self._rows():
            order_id = _parse_order_id(row[0])
            if order_id is not None:
                ids.append(order_id)
        return ids

    def read_all(self) -> list[OrderRecord]:
        records = []
        for line_no, row in enumerate(self._rows(), start=1):
            if row == HEADER:
                continue
            try:
                records.append(self._to_record(row))
            except (ValueError, IndexError, ValidationError) as exc:
                logger.warning("Skipping unreadable ledger row", path=str(self.path), line=line_no, error=str(exc))
        return records

    def append(self, record: OrderRecord) -> None:
        try:
            is_new = not self.path.exists() or self.path.stat().st_size == 0
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("a", newline="", encoding="utf-8") as fh:
                writer = csv.writer(fh, lineterminator="\n")
                if is_new:
                    writer.writerow(HEADER)
                writer.writerow(self._to_row(record))
        except OSError as exc:
            raise DatabaseError(f"Cannot append to {self.path}: {exc}", original_exception=exc) from exc

    @staticmethod
    def _to_row(record: OrderRecord) -> list[str]:
        return [
            str(record.order_id),
            record.timestamp.strftime(TIMESTAMP_FORMAT),
            str(record.total_quantity),
            format_amount(record.subtotal),
            format_amount(record.discount),
            format_amount(record.tax),
            format_amount(record.delivery_fee),
            format_amount(record.total),
            record.promotion_code or NO_COUPON,
        ]

    @staticmethod
    def _to_record(row: list[str]) -> OrderRecord:
        order_id = _parse_order_id(row[0])
        if order_id is None:
            raise ValueError(f"invalid order id {row[0]!r}")
        coupon = row[8]
        return OrderRecord(
            order_id=order_id,
            timestamp=datetime.strptime(row[1].strip(), TIMESTAMP_FORMAT),
            total_quantity=int(row[2]),
            subtotal=float(row[3]),
            discount=float(row[4]),
            tax=float(row[5]),
            delivery_fee=float(row[6]),
            total=float(row[7]),
            promotion_code="" if coupon == NO_COUPON else coupon,
        )
