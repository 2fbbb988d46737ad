# pipeline.py
"""Conversion entry points shared by the CLI and the HTTP routers."""

import structlog

from ora2ch.database import read_catalog_database
from ora2ch.ddl_generator import generate_clickhouse_ddl
from ora2ch.errors import CatalogFileError
from ora2ch.output_sink import save_ddl
from ora2ch.schema_parser import parse_catalog_dump
from ora2ch.type_mapping import TypeMapping

logger = structlog.get_logger(__name__)


def read_catalog_file(path):
    try:
        with open(path, encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise CatalogFileError(f"Couldn't read catalog dump {path}: {e}") from e

    logger.debug("catalog_file_read", path=path, content=content)
    return parse_catalog_dump(content)


def read_catalog(settings):
    if settings.live:
        return read_catalog_database(settings)
    return read_catalog_file(settings.dump_file)


def convert_records(records, settings):
    type_mapping = TypeMapping.default(settings.unmapped_policy)
    return generate_clickhouse_ddl(records, type_mapping, settings.ddl_settings())


def run_conversion(settings) -> str:
    settings.validate_mode()
    records = read_catalog(settings)
    return convert_records(records, settings)


def convert_and_save(settings) -> str:
    ddl = run_conversion(settings)
    save_ddl(settings.output_file, ddl)
    return ddl
