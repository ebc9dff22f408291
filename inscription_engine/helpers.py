from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation

from .config import CTC_TIMESTAMP_FORMAT


def ms_to_datetime(timestamp_ms: str) -> datetime:
    """OKLink reports block time as a unix timestamp in milliseconds."""
    ms = int(timestamp_ms)
    if ms < 0:
        raise ValueError(f"negative timestamp: {timestamp_ms}")
    return datetime.fromtimestamp(ms // 1000, tz=timezone.utc) + timedelta(
        milliseconds=ms % 1000
    )


def to_ctc_timestamp(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).strftime(CTC_TIMESTAMP_FORMAT)


def parse_amount(value_raw: str) -> Decimal:
    try:
        amount = Decimal(str(value_raw).strip())
    except InvalidOperation:
        raise ValueError(f"not a decimal amount: {value_raw!r}") from None
    if not amount.is_finite() or amount < 0:
        raise ValueError(f"invalid amount: {value_raw!r}")
    return amount


def format_amount(amount: Decimal) -> str:
    # Plain notation, never scientific ("1E+3")
    return format(amount, "f")


def normalize_address(addr: str) -> str:
    """
    Bech32 addresses (bc1/tb1) are case-insensitive, base58 ones are not.
    """
    a = (addr or "").strip()
    if a.lower().startswith(("bc1", "tb1", "bcrt1")):
        return a.lower()
    return a


def direction(address: str, from_addr: str, to_addr: str) -> str:
    addr = normalize_address(address)
    f = normalize_address(from_addr)
    t = normalize_address(to_addr)
    if f == addr and t != addr:
        return "out"
    if t == addr and f != addr:
        return "in"
    if f == addr and t == addr:
        return "self"
    return "other"
