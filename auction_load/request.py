from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping
from urllib.parse import urlencode

AUCTIONS_PATH = "/api/public/auctions/"
JSON_HEADERS = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class AuctionListQuery:
    """Filters and paging accepted by the public auction listing."""

    status: str = "IN_PROGRESS"
    page: int = 0
    size: int = 10
    sort: str = "newest,Desc"
    category: str | None = None
    brand: str | None = None
    min_price: int | None = None
    max_price: int | None = None
    is_premium: bool | None = None

    def params(self) -> list[tuple[str, str]]:
        # status, page, size, sort always lead, in this order
        pairs = [
            ("status", self.status),
            ("page", self.page),
            ("size", self.size),
            ("sort", self.sort),
            ("category", self.category),
            ("brand", self.brand),
            ("minPrice", self.min_price),
            ("maxPrice", self.max_price),
            ("isPremium", self.is_premium),
        ]
        return [(key, _format(value)) for key, value in pairs if value is not None]

    def query_string(self) -> str:
        return urlencode(self.params(), safe=",")


@dataclass(frozen=True)
class RequestDescriptor:
    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def name(self) -> str:
        """Stats entry name; groups every iteration under the bare path."""
        return self.url.split("?", 1)[0]


def auction_list_request(query: AuctionListQuery | None = None) -> RequestDescriptor:
    query = query or AuctionListQuery()
    return RequestDescriptor(
        method="GET",
        url=f"{AUCTIONS_PATH}?{query.query_string()}",
        headers=dict(JSON_HEADERS),
    )


def _format(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
