from __future__ import annotations

import logging
from collections.abc import Iterable

from app.dashboard.models import Shop

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("name", "owner_name", "location", "id", "shop_type")
SORT_FIELDS = ("name",)
DEFAULT_SORT = "name"

# query arg -> Shop attribute
FILTER_KEYS = {
    "category": "shop_type",
    "package": "package_type",
}


def unlisted_shop_types(shops: Iterable[Shop], options: Iterable[str]) -> list[str]:
    """Shop types present in the data that no filter option can select."""
    known = set(options)
    return sorted({s.shop_type for s in shops if s.shop_type and s.shop_type not in known})


def warn_unlisted_shop_types(shops: Iterable[Shop], options: Iterable[str]) -> list[str]:
    unlisted = unlisted_shop_types(shops, options)
    if unlisted:
        logger.warning("Shop types without a filter option (update SHOP_TYPE_OPTIONS): %s", ", ".join(unlisted))
    return unlisted
