"""Shared fixtures: OKLink-shaped records and a fake requests session."""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from unittest.mock import Mock

import pytest

WALLET = "bc1pwalletaddress0000000000000000000000000000000000000000000"
OTHER = "bc1pcounterparty00000000000000000000000000000000000000000000"


def make_item(**overrides: Any) -> Dict[str, Any]:
    item = {
        "txId": "txhash1",
        "blockHeight": "795000",
        "state": "success",
        "tokenType": "BRC20",
        "actionType": "mint",
        "fromAddress": "",
        "toAddress": WALLET,
        "amount": "1000",
        "token": "ordi",
        "inscriptionId": "abc123i0",
        "inscriptionNumber": "9000000",
        "index": "0",
        "location": "",
        "msg": "",
        "time": "1685092041000",
    }
    item.update(overrides)
    return item


def make_response_body(
    items: List[Dict[str, Any]], page: int = 1, total_pages: int = 1
) -> Dict[str, Any]:
    return {
        "code": "0",
        "msg": "",
        "data": [
            {
                "page": str(page),
                "limit": "50",
                "totalPage": str(total_pages),
                "totalTransaction": str(len(items)),
                "inscriptionsList": items,
            }
        ],
    }


class FakeResponse:
    def __init__(
        self,
        payload: Optional[Any] = None,
        status_code: int = 200,
        text: str = "",
    ) -> None:
        self._payload = payload
        self.status_code = status_code
        self.text = text

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


@pytest.fixture
def item_factory():
    return make_item


@pytest.fixture
def fake_session():
    """A requests.Session stand-in; set `.get.side_effect` to a list of responses."""
    return Mock()
