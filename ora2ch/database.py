# database.py
import oracledb
import structlog

from ora2ch.errors import CatalogConnectionError, CatalogQueryError
from ora2ch.models import ColumnRecord

logger = structlog.get_logger(__name__)

CATALOG_QUERY = "SELECT * FROM all_tab_columns"

# OWNER, TABLE_NAME, COLUMN_NAME, DATA_TYPE, DATA_TYPE_MOD, DATA_TYPE_OWNER,
# DATA_LENGTH, DATA_PRECISION, DATA_SCALE, NULLABLE, ...
CATALOG_ROW_WIDTH = 10


def get_oracle_config(settings):
    return {
        "user":     settings.catalog_user,
        "password": settings.catalog_password,
        "dsn":      settings.catalog_dsn,
    }


def connect_to_oracle(settings):
    cfg = get_oracle_config(settings)
    try:
        conn = oracledb.connect(**cfg)
    except oracledb.Error as e:
        raise CatalogConnectionError(f"Failed to connect to Oracle at {cfg['dsn']}: {e}") from e
    logger.debug("catalog_connected", dsn=cfg["dsn"])
    return conn


def _number(value):
    return int(value) if value else 0


def row_to_column_record(row):
    if len(row) < CATALOG_ROW_WIDTH:
        raise CatalogQueryError(f"Catalog row has {len(row)} columns, expected at least {CATALOG_ROW_WIDTH}")
    owner, table_name, column_name, data_type = row[0], row[1], row[2], row[3]
    return ColumnRecord(
        owner=owner,
        table_name=table_name,
        column_name=column_name,
        # same keys as a parsed dump, e.g. TIMESTAMP(6)WITHTIMEZONE
        data_type=(data_type or "").replace(" ", ""),
        data_length=_number(row[6]),
        data_precision=_number(row[7]),
        nullable=row[9] == "Y",
    )


def fetch_catalog_columns(conn):
    try:
        with conn.cursor() as cur:
            cur.execute(CATALOG_QUERY)
            rows = cur.fetchall()
    except oracledb.Error as e:
        raise CatalogQueryError(f"Unable to query the column catalog: {e}") from e
    return [row_to_column_record(row) for row in rows]


def read_catalog_database(settings):
    conn = connect_to_oracle(settings)
    try:
        records = fetch_catalog_columns(conn)
    finally:
        conn.close()
    logger.info("catalog_fetched", dsn=settings.catalog_dsn, records=len(records))
    return records
