from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

from .exceptions import ResponseFormatError
from .helpers import ms_to_datetime, parse_amount

# -----------------------------
# Explorer records
# -----------------------------

# OKLink inscriptionsList field -> RawTransaction attribute
RAW_FIELDS = {
    "txId": "tx_id",
    "time": "time",
    "inscriptionId": "inscription_id",
    "token": "token",
    "tokenType": "token_type",
    "actionType": "action_type",
    "state": "state",
    "amount": "amount",
    "fromAddress": "from_address",
    "toAddress": "to_address",
}


@dataclass(frozen=True)
class RawTransaction:
    tx_id: str
    time: datetime
    inscription_id: str
    token: str
    token_type: str  # "BRC20"
    action_type: str  # "mint" | "transfer" | ...
    state: str  # "success" | "fail"
    amount: Decimal
    from_address: str
    to_address: str

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "RawTransaction":
        """
        Build from one entry of OKLink's `inscriptionsList`.

        Only the shape is checked here; whether the record is something we
        know how to report is the classifier's call.
        """
        tx_id = str(item.get("txId") or "<unknown>")
        missing = [k for k in RAW_FIELDS if item.get(k) is None]
        if missing:
            raise ResponseFormatError(
                f"Transaction {tx_id} is missing fields: {', '.join(missing)}"
            )

        try:
            time = ms_to_datetime(item["time"])
        except (ValueError, OverflowError, OSError) as ex:
            raise ResponseFormatError(
                f"Transaction {tx_id} has an invalid time {item['time']!r}: {ex}"
            ) from ex

        try:
            amount = parse_amount(item["amount"])
        except ValueError as ex:
            raise ResponseFormatError(f"Transaction {tx_id}: {ex}") from ex

        return cls(
            tx_id=str(item["txId"]),
            time=time,
            inscription_id=str(item["inscriptionId"]),
            token=str(item["token"]),
            token_type=str(item["tokenType"]),
            action_type=str(item["actionType"]),
            state=str(item["state"]),
            amount=amount,
            from_address=str(item["fromAddress"]),
            to_address=str(item["toAddress"]),
        )


@dataclass(frozen=True)
class Page:
    transactions: List[RawTransaction]
    page: int
    total_pages: int
    total_transactions: int = 0

    @property
    def next_page(self) -> Optional[int]:
        if self.page >= self.total_pages:
            return None
        return self.page + 1


# -----------------------------
# Classification
# -----------------------------


class TransactionKind(str, enum.Enum):
    MINT = "mint"
    TRANSFER_IN = "transfer_in"
    TRANSFER_OUT = "transfer_out"


@dataclass(frozen=True)
class MappingRule:
    category: str  # CTC "Type" column
    label: str  # action name used in the description


@dataclass(frozen=True)
class ClassificationRule:
    name: str
    kind: TransactionKind
    predicate: Callable[[RawTransaction, str], bool]
    mapping: MappingRule


@dataclass(frozen=True)
class ClassifiedTransaction:
    raw: RawTransaction
    kind: TransactionKind
    mapping: MappingRule


# -----------------------------
# CryptoTaxCalculator custom import
# -----------------------------

CSV_COLUMNS = [
    "Timestamp (UTC)",
    "Type",
    "Base Currency",
    "Base Amount",
    "Quote Currency",
    "Quote Amount",
    "Fee Currency",
    "Fee Amount",
    "From",
    "To",
    "Blockchain",
    "ID",
    "Description",
]


@dataclass(frozen=True)
class CsvRow:
    timestamp: str
    type: str
    base_currency: str
    base_amount: str
    quote_currency: str
    quote_amount: str
    fee_currency: str
    fee_amount: str
    from_address: str
    to_address: str
    blockchain: str
    id: str
    description: str

    def as_dict(self) -> Dict[str, str]:
        values = [
            self.timestamp,
            self.type,
            self.base_currency,
            self.base_amount,
            self.quote_currency,
            self.quote_amount,
            self.fee_currency,
            self.fee_amount,
            self.from_address,
            self.to_address,
            self.blockchain,
            self.id,
            self.description,
        ]
        return dict(zip(CSV_COLUMNS, values))
