import logging
import time
from typing import Any, Dict, Iterator, List, Optional

import requests
from requests.exceptions import RequestException

from .config import (
    OKLINK_API_URL,
    OKLINK_AUTH_CODES,
    OKLINK_PAGE_LIMIT,
    OKLINK_PAGE_SLEEP_SEC,
    OKLINK_RATE_LIMIT_CODES,
    OKLINK_RATE_LIMIT_DELAY_SEC,
    OKLINK_RATE_LIMIT_RETRIES,
    OKLINK_TIMEOUT_SEC,
    OKLINK_TRANSACTION_LIST_PATH,
)
from .exceptions import (
    AuthError,
    NetworkError,
    OKLinkAPIError,
    RateLimitError,
    ResponseFormatError,
)
from .models import Page, RawTransaction

log = logging.getLogger(__name__)


class OKLinkClient:
    """
    OKLink explorer client for BTC inscription transactions.

    Only throttling is retried (fixed delay, bounded attempts); every other
    failure is raised to the caller.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = OKLINK_API_URL,
        page_limit: int = OKLINK_PAGE_LIMIT,
        timeout: float = OKLINK_TIMEOUT_SEC,
        rate_limit_retries: int = OKLINK_RATE_LIMIT_RETRIES,
        rate_limit_delay_s: float = OKLINK_RATE_LIMIT_DELAY_SEC,
        page_sleep_s: float = OKLINK_PAGE_SLEEP_SEC,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not api_key:
            raise AuthError("Missing OKLink API key")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.page_limit = page_limit
        self.timeout = timeout
        self.rate_limit_retries = max(0, rate_limit_retries)
        self.rate_limit_delay_s = rate_limit_delay_s
        self.page_sleep_s = page_sleep_s
        self.session = session or requests.Session()

    def _get_once(self, params: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}{OKLINK_TRANSACTION_LIST_PATH}"
        headers = {
            "Ok-Access-Key": self.api_key,
            "Content-Type": "application/json",
        }
        try:
            resp = self.session.get(
                url, params=params, headers=headers, timeout=self.timeout
            )
        except RequestException as ex:
            raise NetworkError(f"OKLink request failed ({url}): {ex!r}") from ex

        if resp.status_code in (401, 403):
            raise AuthError(f"OKLink rejected the API key (HTTP {resp.status_code})")
        if resp.status_code == 429:
            raise RateLimitError("OKLink rate limit hit (HTTP 429)")
        if resp.status_code >= 400:
            raise NetworkError(
                f"OKLink HTTP {resp.status_code}: {(resp.text or '')[:200]}"
            )

        try:
            data = resp.json()
        except ValueError as ex:
            raise ResponseFormatError(
                f"OKLink returned a non-JSON body: {(resp.text or '')[:200]}"
            ) from ex

        if not isinstance(data, dict):
            raise ResponseFormatError(f"Unexpected OKLink response: {data!r}")

        code = str(data.get("code", "0"))
        message = str(data.get("msg", ""))
        if code in OKLINK_AUTH_CODES:
            raise AuthError(f"OKLink auth error {code}: {message}")
        if code in OKLINK_RATE_LIMIT_CODES:
            raise RateLimitError(f"OKLink rate limit {code}: {message}")
        if code != "0":
            raise OKLinkAPIError(code, message)

        return data

    def _get(self, params: Dict[str, Any]) -> Dict[str, Any]:
        for attempt in range(self.rate_limit_retries + 1):
            try:
                return self._get_once(params)
            except RateLimitError as ex:
                if attempt == self.rate_limit_retries:
                    raise
                log.warning(
                    "[oklink] Throttled (attempt %d/%d), retrying in %.1fs: %s",
                    attempt + 1,
                    self.rate_limit_retries + 1,
                    self.rate_limit_delay_s,
                    ex,
                )
                time.sleep(self.rate_limit_delay_s)

        raise RuntimeError("OKLink request failed after retries")

    def fetch_page(self, address: str, page: int = 1) -> Page:
        """
        Fetch one (1-based) page of inscription transactions for `address`.
        """
        params = {
            "address": address,
            "page": page,
            "limit": self.page_limit,
        }
        data = self._get(params)
        return parse_page(data)

    def iter_pages(self, address: str) -> Iterator[Page]:
        page_no: Optional[int] = 1
        while page_no is not None:
            log.info("[oklink] Fetching page %d...", page_no)
            page = self.fetch_page(address, page_no)
            if page.page != page_no:
                raise ResponseFormatError(
                    f"Asked OKLink for page {page_no}, got page {page.page}"
                )
            log.info(
                "[oklink] Fetched page %d out of %d (%d txs)",
                page.page,
                page.total_pages,
                len(page.transactions),
            )
            yield page

            page_no = page.next_page
            if page_no is not None:
                time.sleep(self.page_sleep_s)

    def fetch_all_transactions(self, address: str) -> List[RawTransaction]:
        all_txs: List[RawTransaction] = []
        for page in self.iter_pages(address):
            all_txs.extend(page.transactions)

        log.info("[oklink] Total fetched: %d", len(all_txs))
        return all_txs


def _to_int(value: Any, field: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as ex:
        raise ResponseFormatError(
            f"OKLink field {field!r} is not an integer: {value!r}"
        ) from ex


def parse_page(data: Dict[str, Any]) -> Page:
    """
    OKLink wraps the page in a one-element `data` list:
    {"code": "0", "data": [{"page": "1", "totalPage": "3", "inscriptionsList": [...]}]}
    """
    items = data.get("data")
    if not isinstance(items, list) or not items:
        raise ResponseFormatError(f"No pagination found in OKLink response: {data}")

    pagination = items[0]
    if not isinstance(pagination, dict):
        raise ResponseFormatError(f"Unexpected OKLink pagination: {pagination!r}")

    raw_list = pagination.get("inscriptionsList") or []
    if not isinstance(raw_list, list):
        raise ResponseFormatError(
            f"Expected list in inscriptionsList, got: {type(raw_list)}"
        )

    return Page(
        transactions=[RawTransaction.from_api(item) for item in raw_list],
        page=_to_int(pagination.get("page"), "page"),
        total_pages=_to_int(pagination.get("totalPage"), "totalPage"),
        total_transactions=_to_int(
            pagination.get("totalTransaction", 0), "totalTransaction"
        ),
    )
