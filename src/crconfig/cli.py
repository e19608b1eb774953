"""
Command-line entry point.

Builds the CRConfig document for one CDN and writes it as JSON.
"""

import argparse
import sys
from typing import Optional

import yaml

from .config.settings import SynthSettings, load_settings
from .database.base import Store
from .database.postgres_store import MemoryStore, PostgresStore
from .errors import CRConfigError
from .logging import configure_logging, get_logger, synthesis_run
from .synth.crconfig import build_crconfig

logger = get_logger(__name__)

EXIT_SYNTHESIS_ERROR = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build a traffic router CRConfig for one CDN")
    parser.add_argument("--cdn", help="CDN name")
    parser.add_argument("--domain", help="CDN domain suffix")
    parser.add_argument("--config", help="YAML settings file")
    parser.add_argument("--database-url", help="PostgreSQL URL")
    parser.add_argument("--fixture", help="YAML file of store rows to use instead of PostgreSQL")
    parser.add_argument("--output", help="Output file (default: stdout)")
    parser.add_argument("--indent", type=int, default=None, help="JSON indent")
    return parser


def _load_fixture(path: str) -> MemoryStore:
    """
    Load a YAML fixture of store rows.

    Raises:
        ValueError: the file does not hold a valid row mapping
    """
    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"invalid fixture file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"fixture file {path} must contain a mapping of CDNs")
    try:
        return MemoryStore.from_dict(data)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise ValueError(f"invalid row in fixture file {path}: {e!r}") from e


def run(
    settings: SynthSettings,
    output: Optional[str] = None,
    indent: Optional[int] = None,
    store: Optional[Store] = None,
) -> None:
    """
    Build the document and write it out.

    Reads from ``store`` when given, otherwise from PostgreSQL.
    """
    if store is not None:
        crconfig = build_crconfig(settings.cdn, settings.domain, store)
    else:
        db = settings.database
        pg_store = PostgresStore(
            host=db.host,
            port=db.port,
            database=db.database,
            user=db.user,
            password=db.password,
            url=db.url,
        )
        pg_store.connect()
        try:
            crconfig = build_crconfig(settings.cdn, settings.domain, pg_store)
        finally:
            pg_store.close()

    document = crconfig.to_json(indent=indent)
    if output:
        with open(output, "w") as f:
            f.write(document)
            f.write("\n")
    else:
        sys.stdout.write(document + "\n")


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    store = None
    try:
        settings = load_settings(
            args.config,
            cdn=args.cdn,
            domain=args.domain,
            database_url=args.database_url,
            fixture=args.fixture,
        )
        settings.validate()
        if settings.fixture:
            store = _load_fixture(settings.fixture)
    except (OSError, ValueError) as e:
        logger.error("Invalid configuration", error=str(e))
        return EXIT_CONFIG_ERROR

    configure_logging(level=settings.logging.level, format=settings.logging.format)

    with synthesis_run(settings.cdn):
        try:
            run(settings, output=args.output, indent=args.indent, store=store)
        except CRConfigError as e:
            logger.error("CRConfig synthesis failed", error=str(e))
            return EXIT_SYNTHESIS_ERROR
    return 0
