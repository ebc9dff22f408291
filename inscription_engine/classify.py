import logging
from collections import Counter
from typing import Iterable, List, Sequence

from .exceptions import UnsupportedTransactionType
from .helpers import direction
from .models import (
    ClassificationRule,
    ClassifiedTransaction,
    MappingRule,
    RawTransaction,
    TransactionKind,
)

log = logging.getLogger(__name__)

# Anything else (failed txs, other token standards) needs new handling first
SUPPORTED_STATES = {"success"}
SUPPORTED_TOKEN_TYPES = {"BRC20"}


def _is_mint(tx: RawTransaction, wallet: str) -> bool:
    return tx.action_type == "mint"


def _is_transfer_in(tx: RawTransaction, wallet: str) -> bool:
    return (
        tx.action_type == "transfer"
        and direction(wallet, tx.from_address, tx.to_address) == "in"
    )


def _is_transfer_out(tx: RawTransaction, wallet: str) -> bool:
    return (
        tx.action_type == "transfer"
        and direction(wallet, tx.from_address, tx.to_address) == "out"
    )


# Ordered: first match wins
DEFAULT_RULES = (
    ClassificationRule(
        name="mint",
        kind=TransactionKind.MINT,
        predicate=_is_mint,
        mapping=MappingRule(category="mint", label="Mint"),
    ),
    ClassificationRule(
        name="transfer_in",
        kind=TransactionKind.TRANSFER_IN,
        predicate=_is_transfer_in,
        mapping=MappingRule(category="buy", label="Transfer"),
    ),
    ClassificationRule(
        name="transfer_out",
        kind=TransactionKind.TRANSFER_OUT,
        predicate=_is_transfer_out,
        mapping=MappingRule(category="sell", label="Transfer"),
    ),
)


def classify_transaction(
    tx: RawTransaction,
    wallet: str,
    rules: Sequence[ClassificationRule] = DEFAULT_RULES,
) -> ClassifiedTransaction:
    """
    Tag a transaction with the kind of the first rule whose predicate
    matches. Raises UnsupportedTransactionType when nothing matches; we never
    guess a kind.
    """
    if tx.state not in SUPPORTED_STATES:
        raise UnsupportedTransactionType(tx.tx_id, f"unknown state {tx.state!r}")
    if tx.token_type not in SUPPORTED_TOKEN_TYPES:
        raise UnsupportedTransactionType(
            tx.tx_id, f"unknown token type {tx.token_type!r}"
        )

    for rule in rules:
        if rule.predicate(tx, wallet):
            return ClassifiedTransaction(raw=tx, kind=rule.kind, mapping=rule.mapping)

    raise UnsupportedTransactionType(
        tx.tx_id,
        f"action {tx.action_type!r} with direction "
        f"{direction(wallet, tx.from_address, tx.to_address)!r} "
        f"(inscription {tx.inscription_id}) matches no rule",
    )


def classify_transactions(
    txs: Iterable[RawTransaction],
    wallet: str,
    rules: Sequence[ClassificationRule] = DEFAULT_RULES,
) -> List[ClassifiedTransaction]:
    classified = [classify_transaction(tx, wallet, rules) for tx in txs]

    counts = Counter(c.kind.value for c in classified)
    log.info(
        "[classify] %d transactions classified: %s", len(classified), dict(counts)
    )
    return classified
