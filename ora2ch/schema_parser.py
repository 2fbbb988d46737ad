# schema_parser.py
"""Parse a bordered ASCII table dump of ALL_TAB_COLUMNS.

The dump is a title box followed by the result table, as printed by a SQL
shell::

    +-------------------------------+
    | SELECT * FROM all_tab_columns |
    +-------------------------------+
    +-------+------------+-------------+-----------+-----+-----+-------------+----------------+------------+----------+
    | OWNER | TABLE_NAME | COLUMN_NAME | DATA_TYPE | ... | ... | DATA_LENGTH | DATA_PRECISION | DATA_SCALE | NULLABLE |
    +-------+------------+-------------+-----------+-----+-----+-------------+----------------+------------+----------+
    | HR    | EMPLOYEES  | EMP_ID      | NUMBER    |     |     | 22          | 6              | 0          | N        |
    +-------+------------+-------------+-----------+-----+-----+-------------+----------------+------------+----------+

Rows after the 4th border line are data rows.
"""

import structlog

from ora2ch.errors import ParseError
from ora2ch.models import ColumnRecord

logger = structlog.get_logger(__name__)

BORDER_CHAR = "+"
DATA_REGION_BORDER = 4
MIN_ROW_FIELDS = 11


def _to_int(value):
    try:
        number = int(value)
    except ValueError:
        return 0
    return number if number >= 0 else 0


def _to_flag(value):
    return value == "Y"


# position after splitting on "|" -> (ColumnRecord field, converter)
DUMP_FIELD_OFFSETS = {
    1: ("owner", str),
    2: ("table_name", str),
    3: ("column_name", str),
    4: ("data_type", str),
    7: ("data_length", _to_int),
    8: ("data_precision", _to_int),
    10: ("nullable", _to_flag),
}


def is_border(line):
    return line.startswith(BORDER_CHAR)


def parse_row(line, line_index):
    """Turn one data row into a ColumnRecord."""
    fields = line.replace(" ", "").split("|")
    if not line or len(fields) < MIN_ROW_FIELDS:
        raise ParseError("malformed row", line_index)

    values = {
        name: convert(fields[position])
        for position, (name, convert) in DUMP_FIELD_OFFSETS.items()
    }
    return ColumnRecord(**values)


def parse_catalog_dump(content: str) -> list[ColumnRecord]:
    """Parse the dump text into column records, in input order.

    Input without a data region (fewer than four border lines) yields an
    empty list. A malformed data row raises ``ParseError``.
    """
    records = []
    if not content:
        return records

    borders = 0
    for index, line in enumerate(content.removesuffix("\n").split("\n")):
        if is_border(line):
            borders += 1
            continue
        if borders < DATA_REGION_BORDER:
            continue
        records.append(parse_row(line, index))

    logger.debug("catalog_parsed", borders=borders, records=len(records))
    return records
