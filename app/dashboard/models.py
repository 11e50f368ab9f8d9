from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Protocol


class Record(Protocol):
    id: int

    def to_dict(self) -> dict[str, Any]: ...


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _pick(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


@dataclass(frozen=True)
class Customer:
    id: int
    name: str
    email: str
    phone: str
    address: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Customer":
        return cls(
            id=int(data["id"]),
            name=_text(data.get("name")),
            email=_text(data.get("email")),
            phone=_text(data.get("phone")),
            address=_text(data.get("address")),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Shop:
    id: int
    name: str
    owner_name: str
    location: str
    shop_type: str
    package_type: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Shop":
        """Accepts both the session (snake_case) and backend (camelCase) spellings."""
        return cls(
            id=int(data["id"]),
            name=_text(data.get("name")),
            owner_name=_text(_pick(data, "owner_name", "ownerName")),
            location=_text(data.get("location")),
            shop_type=_text(_pick(data, "shop_type", "shopType")),
            package_type=_text(_pick(data, "package_type", "packageType")),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
