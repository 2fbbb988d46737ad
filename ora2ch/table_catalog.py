from enum import Enum

import structlog

from ora2ch.models import TableDescriptor

logger = structlog.get_logger(__name__)


class TableIdentity(str, Enum):
    # NAME matches the historical output: same-named tables of different
    # owners collapse into one table.
    NAME = "name"
    OWNER_AND_NAME = "owner_and_name"


def table_key(item, identity=TableIdentity.NAME):
    """Identity of the table a record (or descriptor) belongs to."""
    if TableIdentity(identity) is TableIdentity.OWNER_AND_NAME:
        return (item.owner, item.table_name)
    return item.table_name


def distinct_tables(records, identity=TableIdentity.NAME):
    """One descriptor per distinct table, in first-seen order."""
    seen = set()
    tables = []
    for record in records:
        key = table_key(record, identity)
        if key in seen:
            continue
        seen.add(key)
        logger.debug("table_key_new", table=record.table_name, owner=record.owner)
        tables.append(TableDescriptor(owner=record.owner, table_name=record.table_name))
    return tables


def group_columns(records, identity=TableIdentity.NAME):
    """Map each table key to its columns, keeping their input order."""
    columns = {}
    for record in records:
        columns.setdefault(table_key(record, identity), []).append(record)
    return columns


def selected_tables(records, settings):
    """Distinct tables that DDL is emitted for, honouring ``settings.owner_filter``."""
    tables = distinct_tables(records, settings.table_identity)
    if settings.owner_filter:
        tables = [t for t in tables if t.owner == settings.owner_filter]
    return tables
