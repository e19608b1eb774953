"""
Regex / MatchSet Assembler

Rebuilds each delivery service's match sets from its regex rows. Set
numbers may be sparse; the resulting list is dense, with empty
placeholders for set numbers that carry no routable rule.
"""

import re

from ..database.base import StoreReader
from ..logging import get_logger
from ..models.delivery_service import MatchItem, MatchSet
from ..models.rows import RegexRow
from ..utils.constants import (
    DNS_TYPE_PREFIX,
    HOST_REGEX_TYPE,
    PROTOCOL_DNS,
    PROTOCOL_HTTP,
    REGEX_MATCH_TYPES,
)

logger = get_logger(__name__)

# Alternatives are tried in order at each position: "\", then ".*", then "."
_PATTERN_TO_HOST = re.compile(r"\\|\.\*|\.")


def get_protocol_str(ds_type: str) -> str:
    """Routing axis of a delivery service type name."""
    if ds_type.startswith(DNS_TYPE_PREFIX):
        return PROTOCOL_DNS
    return PROTOCOL_HTTP


def pattern_to_host(pattern: str) -> str:
    """Strip regex escapes, wildcards and dots from a host pattern."""
    return _PATTERN_TO_HOST.sub("", pattern)


class _MatchSetSlot:
    """Growable match set used while assembling."""

    def __init__(self, protocol: str):
        self.protocol = protocol
        self.items: list[MatchItem] = []

    def freeze(self) -> MatchSet:
        return MatchSet(protocol=self.protocol, match_list=tuple(self.items))


def build_match_sets(
    rows: list[RegexRow],
    domain: str,
) -> tuple[dict[str, tuple[MatchSet, ...]], dict[str, tuple[str, ...]]]:
    """
    Assemble match sets and host domains per delivery service.

    Args:
        rows: Regex rows ordered by set number
        domain: CDN domain suffix appended to host patterns

    Returns:
        ({xml_id: match sets}, {xml_id: domains})
    """
    slots: dict[str, list[_MatchSetSlot]] = {}
    domains: dict[str, list[str]] = {}

    for row in rows:
        protocol = get_protocol_str(row.ds_type)
        ds_slots = slots.setdefault(row.xml_id, [])

        # Grow before the type check so skipped rows still reserve their slot
        while len(ds_slots) <= row.set_number:
            ds_slots.append(_MatchSetSlot(protocol))

        match_type = REGEX_MATCH_TYPES.get(row.type)
        if match_type is None:
            logger.info(
                "Unknown delivery service regex type, skipping",
                xml_id=row.xml_id,
                regex_type=row.type,
            )
            continue

        slot = ds_slots[row.set_number]
        slot.protocol = protocol
        slot.items.append(MatchItem(match_type=match_type, regex=row.pattern))

        if row.type == HOST_REGEX_TYPE and row.set_number == 0:
            domains.setdefault(row.xml_id, []).append(
                f"{pattern_to_host(row.pattern)}.{domain}"
            )

    match_sets = {
        xml_id: tuple(slot.freeze() for slot in ds_slots)
        for xml_id, ds_slots in slots.items()
    }
    return match_sets, {xml_id: tuple(d) for xml_id, d in domains.items()}


def get_ds_regexes_domains(
    cdn: str,
    domain: str,
    reader: StoreReader,
) -> tuple[dict[str, tuple[MatchSet, ...]], dict[str, tuple[str, ...]]]:
    """Fetch regex rows for a CDN and assemble them."""
    return build_match_sets(reader.regexes(cdn), domain)
