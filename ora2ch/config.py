# config.py
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from ora2ch.errors import ConfigError
from ora2ch.table_catalog import TableIdentity
from ora2ch.type_mapping import UnmappedTypePolicy

load_dotenv()

DEFAULT_TABLE_PREFIX = "ora_"
DEFAULT_OUTPUT_FILE = "clickhouse.sql"


class DDLSettings(BaseModel):
    table_prefix: str = DEFAULT_TABLE_PREFIX
    source_dsn: str
    table_identity: TableIdentity = TableIdentity.NAME
    owner_filter: Optional[str] = None


class ConversionSettings(BaseModel):
    """Everything one conversion run needs, built once and passed down."""

    dump_file: Optional[str] = None
    catalog_dsn: Optional[str] = None
    catalog_user: Optional[str] = None
    catalog_password: Optional[str] = None
    source_dsn: Optional[str] = None
    owner_filter: Optional[str] = None
    table_prefix: str = DEFAULT_TABLE_PREFIX
    output_file: str = DEFAULT_OUTPUT_FILE
    unmapped_policy: UnmappedTypePolicy = UnmappedTypePolicy.FALLBACK
    table_identity: TableIdentity = TableIdentity.NAME
    debug: bool = False

    @property
    def live(self):
        return bool(self.catalog_dsn)

    def resolved_source_dsn(self):
        return self.source_dsn or self.catalog_dsn

    def validate_mode(self):
        if self.dump_file and self.catalog_dsn:
            raise ConfigError("Provide either a dump file or a catalog connection, not both")
        if not self.dump_file and not self.catalog_dsn:
            raise ConfigError("Provide a dump file or a catalog connection")
        if not self.resolved_source_dsn():
            raise ConfigError("A source ODBC DSN is required to build the ENGINE clause")
        return self

    def ddl_settings(self):
        return DDLSettings(
            table_prefix=self.table_prefix,
            source_dsn=self.resolved_source_dsn() or "",
            table_identity=self.table_identity,
            owner_filter=self.owner_filter,
        )


def _env_flag(name):
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


def get_settings_env():
    return {
        "dump_file":        os.getenv("ORA_DUMP_FILE"),
        "catalog_dsn":      os.getenv("ORA_CONNECT_STRING"),
        "catalog_user":     os.getenv("ORA_USER"),
        "catalog_password": os.getenv("ORA_PASSWORD"),
        "source_dsn":       os.getenv("ORA_ODBC_DSN"),
        "owner_filter":     os.getenv("ORA_OWNER"),
        "table_prefix":     os.getenv("CH_TABLE_PREFIX", DEFAULT_TABLE_PREFIX),
        "output_file":      os.getenv("CH_OUTPUT_FILE", DEFAULT_OUTPUT_FILE),
        "unmapped_policy":  os.getenv("CH_UNMAPPED_POLICY", UnmappedTypePolicy.FALLBACK.value),
        "table_identity":   os.getenv("CH_TABLE_IDENTITY", TableIdentity.NAME.value),
        "debug":            _env_flag("ORA2CH_DEBUG"),
    }


def load_settings(**overrides):
    """Settings from the environment, with non-None overrides applied on top."""
    values = get_settings_env()
    values.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return ConversionSettings(**values)
    except ValueError as e:
        raise ConfigError(f"Invalid settings: {e}") from e
