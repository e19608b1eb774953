"""Tests for static DNS entry assembly."""

from src.crconfig.database.postgres_store import MemoryStore
from src.crconfig.models.rows import StaticDNSRow
from src.crconfig.synth.static_dns import build_static_dns_entries, get_static_dns_entries


class TestBuildStaticDNSEntries:
    """Test grouping and normalization."""

    def test_record_suffix_removed(self):
        rows = [StaticDNSRow("ds1", "www", 300, "origin.example.com.", "CNAME_RECORD")]
        entries = build_static_dns_entries(rows)

        entry = entries["ds1"][0]
        assert entry.type == "CNAME"
        assert entry.name == "www"
        assert entry.ttl == 300
        assert entry.value == "origin.example.com."

    def test_order_preserved_per_delivery_service(self):
        rows = [
            StaticDNSRow("ds1", "b", 60, "10.0.0.2", "A_RECORD"),
            StaticDNSRow("ds2", "x", 60, "10.0.0.9", "A_RECORD"),
            StaticDNSRow("ds1", "a", 60, "10.0.0.1", "A_RECORD"),
        ]
        entries = build_static_dns_entries(rows)

        assert [e.name for e in entries["ds1"]] == ["b", "a"]
        assert [e.name for e in entries["ds2"]] == ["x"]

    def test_from_store(self):
        store = MemoryStore()
        store.add_static_dns_entry("cdn1", StaticDNSRow("ds1", "v6", 60, "::1", "AAAA_RECORD"))

        entries = get_static_dns_entries("cdn1", store)
        assert entries["ds1"][0].type == "AAAA"
