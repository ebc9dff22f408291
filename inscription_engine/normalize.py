from typing import Iterable, List

from .config import CTC_BLOCKCHAIN
from .helpers import format_amount, to_ctc_timestamp
from .models import ClassifiedTransaction, CsvRow


def to_csv_row(classified: ClassifiedTransaction) -> CsvRow:
    """Flatten a classified transaction into CTC's custom import columns."""
    tx = classified.raw
    mapping = classified.mapping

    return CsvRow(
        timestamp=to_ctc_timestamp(tx.time),
        type=mapping.category,
        base_currency=tx.token,
        base_amount=format_amount(tx.amount),
        # No quote side or fee in the inscription list
        quote_currency="",
        quote_amount="",
        fee_currency="",
        fee_amount="",
        from_address=tx.from_address,
        to_address=tx.to_address,
        blockchain=CTC_BLOCKCHAIN,
        id=tx.tx_id,
        description=(
            f"{tx.token_type} {mapping.label} "
            f"with inscription_id {tx.inscription_id}"
        ),
    )


def normalize_for_csv(classified: Iterable[ClassifiedTransaction]) -> List[CsvRow]:
    return [to_csv_row(c) for c in classified]
