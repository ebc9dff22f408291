import argparse
import logging
import sys
from typing import List, Optional

from .config import LOG_LEVEL
from .exceptions import InscriptionExportError
from .pipeline import run_export

log = logging.getLogger("inscription_engine")


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-5s | %(message)s",
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Export a wallet's BRC-20 inscription activity to a "
        "CryptoTaxCalculator CSV."
    )
    parser.add_argument("api_key", type=str, help="OKLink API key")
    parser.add_argument("wallet", type=str, help="Bitcoin wallet address")
    args = parser.parse_args(argv)

    setup_logging(LOG_LEVEL)

    try:
        path = run_export(api_key=args.api_key, wallet=args.wallet)
    except InscriptionExportError as ex:
        log.error("Export failed: %s", ex)
        return 1

    log.info("Successfully wrote %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
