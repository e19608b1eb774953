"""Static DNS Assembler."""

from ..database.base import StoreReader
from ..models.delivery_service import StaticDNSEntry
from ..models.rows import StaticDNSRow
from ..utils.constants import STATIC_DNS_TYPE_SUFFIX


def build_static_dns_entries(rows: list[StaticDNSRow]) -> dict[str, tuple[StaticDNSEntry, ...]]:
    """Group static DNS rows by delivery service, keeping row order."""
    entries: dict[str, list[StaticDNSEntry]] = {}
    for row in rows:
        entries.setdefault(row.xml_id, []).append(
            StaticDNSEntry(
                name=row.name,
                ttl=row.ttl,
                value=row.value,
                type=row.type.replace(STATIC_DNS_TYPE_SUFFIX, ""),
            )
        )
    return {xml_id: tuple(e) for xml_id, e in entries.items()}


def get_static_dns_entries(cdn: str, reader: StoreReader) -> dict[str, tuple[StaticDNSEntry, ...]]:
    return build_static_dns_entries(reader.static_dns_entries(cdn))
