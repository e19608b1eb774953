"""Tests for the command-line entry point."""

import json

import pytest

from src.crconfig.cli import EXIT_CONFIG_ERROR, EXIT_SYNTHESIS_ERROR, main

FIXTURE = """
cdn1:
  delivery_services:
    - xml_id: movies
      type: HTTP
      protocol: 2
  regexes:
    - pattern: '.*\\.movies\\..*'
      type: HOST_REGEXP
      ds_type: HTTP
      set_number: 0
      xml_id: movies
  server_profile_parameters:
    - profile: EDGE
      name: tld.ttls.NS
      value: '120'
"""


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("CRCONFIG_CDN", "CRCONFIG_DOMAIN", "DATABASE_URL", "LOG_FORMAT"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def fixture_file(tmp_path):
    path = tmp_path / "rows.yaml"
    path.write_text(FIXTURE)
    return str(path)


class TestMain:
    """Test CLI runs against a fixture store."""

    def test_writes_document(self, fixture_file, tmp_path):
        output = tmp_path / "crconfig.json"
        code = main([
            "--cdn", "cdn1",
            "--domain", "cdn.example.com",
            "--fixture", fixture_file,
            "--output", str(output),
        ])

        assert code == 0
        doc = json.loads(output.read_text())
        movies = doc["deliveryServices"]["movies"]
        assert movies["domains"] == ["movies.cdn.example.com"]
        assert movies["sslEnabled"] == "true"
        assert doc["config"]["ttls"]["NS"] == "120"

    def test_stdout(self, fixture_file, capsys):
        code = main(["--cdn", "cdn1", "--domain", "cdn.example.com", "--fixture", fixture_file])
        assert code == 0
        doc = json.loads(capsys.readouterr().out)
        assert "movies" in doc["deliveryServices"]

    def test_missing_domain(self, fixture_file):
        assert main(["--cdn", "cdn1", "--fixture", fixture_file]) == EXIT_CONFIG_ERROR

    def test_synthesis_error(self, tmp_path):
        path = tmp_path / "conflict.yaml"
        path.write_text(
            "cdn1:\n"
            "  server_profile_parameters:\n"
            "    - {profile: EDGE, name: tld.soa.admin, value: a}\n"
            "    - {profile: MID, name: tld.soa.admin, value: b}\n"
        )
        output = tmp_path / "out.json"
        code = main([
            "--cdn", "cdn1", "--domain", "d", "--fixture", str(path), "--output", str(output),
        ])
        assert code == EXIT_SYNTHESIS_ERROR
        assert not output.exists()

    def test_missing_fixture(self, tmp_path):
        missing = str(tmp_path / "nope.yaml")
        code = main(["--cdn", "cdn1", "--domain", "d", "--fixture", missing])
        assert code == EXIT_CONFIG_ERROR

    @pytest.mark.parametrize("content", [
        "cdn1: [unclosed\n",
        "- just\n- a list\n",
        "cdn1:\n  regexes:\n    - {pattern: x}\n",
        "cdn1:\n  static_dns_entries:\n    - {xml_id: a, name: www, ttl: soon, value: v, type: A}\n",
    ])
    def test_malformed_fixture(self, tmp_path, content):
        path = tmp_path / "bad.yaml"
        path.write_text(content)
        output = tmp_path / "out.json"
        code = main([
            "--cdn", "cdn1", "--domain", "d", "--fixture", str(path), "--output", str(output),
        ])
        assert code == EXIT_CONFIG_ERROR
        assert not output.exists()
