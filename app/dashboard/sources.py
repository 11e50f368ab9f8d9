from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from app.dashboard import fixtures
from app.dashboard.backend_client import BackendClient, BackendError, client_from_config
from app.dashboard.constants import CUSTOMER_LIST_PATH, SHOP_LIST_PATH
from app.dashboard.models import Customer, Record, Shop

logger = logging.getLogger(__name__)


class DataSource:
    def load(self) -> list[Record]:
        raise NotImplementedError


@dataclass(frozen=True)
class FixtureSource(DataSource):
    records: tuple[Any, ...]

    def load(self) -> list[Record]:
        return list(self.records)


@dataclass(frozen=True)
class RemoteSource(DataSource):
    client: BackendClient
    path: str
    envelope_key: str
    parse: Callable[[dict[str, Any]], Record]

    def load(self) -> list[Record]:
        payload = self.client.get_json(self.path)
        rows: Iterable[Any]
        if isinstance(payload, dict):
            rows = payload.get(self.envelope_key) or []
        else:
            rows = payload
        if not isinstance(rows, list):
            raise BackendError(f"Expected a list of {self.envelope_key} from {self.path}")
        records = []
        for row in rows:
            try:
                records.append(self.parse(row))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed %s row %r: %s", self.envelope_key, row, e)
        return records


_FIXTURES = {
    "customers": fixtures.CUSTOMERS,
    "shops": fixtures.SHOPS,
}

_REMOTE = {
    "customers": (CUSTOMER_LIST_PATH, Customer.from_dict),
    "shops": (SHOP_LIST_PATH, Shop.from_dict),
}


def source_from_config(config: dict, kind: str) -> DataSource:
    backend = (config.get("DATA_SOURCE") or "fixture").strip().lower()
    if backend == "remote":
        path, parse = _REMOTE[kind]
        return RemoteSource(client=client_from_config(config), path=path, envelope_key=kind, parse=parse)
    # default fixture
    return FixtureSource(records=_FIXTURES[kind])
