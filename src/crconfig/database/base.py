"""Read interface every CRConfig store provides."""

from contextlib import AbstractContextManager
from typing import Protocol

from ..models.rows import (
    DeliveryServiceRow,
    ProfileParameterRow,
    RegexRow,
    StaticDNSRow,
)


class StoreReader(Protocol):
    """
    Query-shaped reads used by one synthesis run.

    All methods are parameterized by CDN name and only see active
    delivery services.
    """

    def delivery_services(self, cdn: str) -> list[DeliveryServiceRow]:
        ...

    def static_dns_entries(self, cdn: str) -> list[StaticDNSRow]:
        ...

    def regexes(self, cdn: str) -> list[RegexRow]:
        """Regex rows ordered by set number ascending."""
        ...

    def server_profile_parameters(self, cdn: str) -> list[ProfileParameterRow]:
        ...


class Store(Protocol):
    """A store hands out readers bound to one consistent snapshot."""

    def snapshot(self) -> AbstractContextManager[StoreReader]:
        ...
