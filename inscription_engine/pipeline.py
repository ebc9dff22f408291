import logging
from typing import Optional, Sequence

import pandas as pd

from .classify import DEFAULT_RULES, classify_transactions
from .csv_export import default_output_path, write_csv
from .exceptions import InscriptionExportError
from .models import CSV_COLUMNS, ClassificationRule, CsvRow
from .normalize import normalize_for_csv
from .oklink_api import OKLinkClient

log = logging.getLogger(__name__)


def summarize_rows(rows: Sequence[CsvRow]) -> pd.DataFrame:
    """
    Per (Type, Base Currency) transaction counts and amount totals.
    """
    columns = ["Type", "Base Currency", "transactions", "total_amount"]
    if not rows:
        return pd.DataFrame(columns=columns)

    df = pd.DataFrame([r.as_dict() for r in rows], columns=CSV_COLUMNS)
    df["amount"] = pd.to_numeric(df["Base Amount"], errors="coerce")
    summary = (
        df.groupby(["Type", "Base Currency"], sort=True)
        .agg(transactions=("ID", "size"), total_amount=("amount", "sum"))
        .reset_index()
    )
    return summary[columns]


def run_export(
    api_key: str,
    wallet: str,
    *,
    output_path: Optional[str] = None,
    client: Optional[OKLinkClient] = None,
    rules: Sequence[ClassificationRule] = DEFAULT_RULES,
) -> str:
    """
    Fetch every inscription transaction for `wallet`, classify and map them,
    then write the CTC CSV once. Returns the path written.

    Any failure surfaces before the output file is created.
    """
    wallet = (wallet or "").strip()
    if not wallet:
        raise InscriptionExportError("A wallet address is required")

    log.info("Fetching inscriptions for wallet %s", wallet)

    client = client or OKLinkClient(api_key)
    raw_txs = client.fetch_all_transactions(wallet)

    classified = classify_transactions(raw_txs, wallet, rules)
    rows = normalize_for_csv(classified)

    log.info("Total inscriptions: %d", len(rows))
    summary = summarize_rows(rows)
    for rec in summary.to_dict("records"):
        log.info(
            "  %-5s %-10s %4d txs  total %s",
            rec["Type"],
            rec["Base Currency"],
            rec["transactions"],
            rec["total_amount"],
        )

    path = output_path or default_output_path()
    write_csv(path, rows)
    return path
