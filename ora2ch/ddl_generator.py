# ddl_generator.py
import structlog

from ora2ch.table_catalog import group_columns, selected_tables, table_key

logger = structlog.get_logger(__name__)


def engine_clause(source_dsn, owner, table_name):
    return f"ODBC('DSN={source_dsn}', '{owner}', '{table_name}')"


def column_clause(record, type_mapping):
    return f"`{record.column_name}` {type_mapping.lookup(record.data_type)}"


def generate_table_ddl(table, columns, type_mapping, settings):
    """DROP + CREATE block for one table, followed by a blank line."""
    name = f"{settings.table_prefix}{table.table_name}"
    column_list = ",".join(column_clause(c, type_mapping) for c in columns)
    lines = [
        f"DROP TABLE IF EXISTS {name};",
        f"CREATE TABLE {name} ({column_list}) ENGINE = "
        f"{engine_clause(settings.source_dsn, table.owner, table.table_name)};",
    ]
    return "\n".join(lines) + "\n\n"


def generate_clickhouse_ddl(records, type_mapping, settings) -> str:
    """Emit one DROP/CREATE block per distinct table, in first-seen order.

    Columns keep the order in which they appear in ``records``. Tables are
    addressed on the ODBC side by their original owner and name; only the
    ClickHouse table name carries ``settings.table_prefix``.
    """
    tables = selected_tables(records, settings)
    columns = group_columns(records, settings.table_identity)

    blocks = []
    for table in tables:
        table_columns = columns.get(table_key(table, settings.table_identity))
        if not table_columns:
            continue
        blocks.append(generate_table_ddl(table, table_columns, type_mapping, settings))

    logger.info("ddl_generated", tables=len(blocks), columns=len(records))
    return "".join(blocks)
