"""Generate ClickHouse ODBC-table DDL from an Oracle column catalog."""

__version__ = "1.0.0"
