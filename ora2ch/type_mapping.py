# type_mapping.py
from enum import Enum
from types import MappingProxyType

import structlog

from ora2ch.errors import UnmappedTypeError

logger = structlog.get_logger(__name__)

UNKNOWN_TYPE = "UNKNOWN"

# Keys are Oracle type names with spaces removed, the way they appear in a
# parsed dump. TODO: NUMBER loses the source precision/scale, map it from
# data_precision once ClickHouse Decimal widths are agreed on.
ORA_TO_CLICKHOUSE = MappingProxyType({
    "ANYDATA": "String",
    "BINARY_DOUBLE": "String",
    "BLOB": "String",
    "CHAR": "String",
    "CLOB": "String",
    "COL_CLS_LIST": "String",
    "DATE": "DateTime",
    "DS_VARRAY_4_CLOB": "String",
    "FLOAT": "Float128",
    "LONG": "Int128",
    "LONGRAW": "Int128",
    "NUMBER": "Decimal256(30)",
    "NVARCHAR2": "String",
    "RAW": "String",
    "ROWID": "Int128",
    "SDO_DIM_ARRAY": "String",
    "SDO_GEOMETRY": "String",
    "SDO_NUMBER_ARRAY": "String",
    "SDO_ORGSCL_TYPE": "String",
    "SDO_STRING_ARRAY": "String",
    "TIMESTAMP(0)": "DateTime",
    "TIMESTAMP(3)": "DateTime",
    "TIMESTAMP(3)WITHTIMEZONE": "DateTime",
    "TIMESTAMP(6)": "DateTime",
    "TIMESTAMP(6)WITHTIMEZONE": "DateTime",
    "TIMESTAMP(9)": "DateTime",
    "UNDEFINED": "String",
    "VARCHAR2": "String",
    "XMLTYPE": "String",
    UNKNOWN_TYPE: "String",
})


class UnmappedTypePolicy(str, Enum):
    FALLBACK = "fallback"
    FAIL = "fail"


class TypeMapping:
    """Read-only Oracle -> ClickHouse type lookup.

    Lookups are exact and case-sensitive. A type that is not registered either
    resolves to the type registered under ``UNKNOWN`` (``FALLBACK``) or raises
    ``UnmappedTypeError`` (``FAIL``).
    """

    def __init__(self, table, policy=UnmappedTypePolicy.FALLBACK):
        if UNKNOWN_TYPE not in table:
            raise ValueError(f"type table must register a {UNKNOWN_TYPE!r} fallback")
        self._table = MappingProxyType(dict(table))
        self.policy = UnmappedTypePolicy(policy)
        self._warned = set()

    @classmethod
    def default(cls, policy=UnmappedTypePolicy.FALLBACK):
        return cls(ORA_TO_CLICKHOUSE, policy)

    def __contains__(self, source_type):
        return source_type in self._table

    def items(self):
        return [(k, v) for k, v in self._table.items() if k != UNKNOWN_TYPE]

    @property
    def fallback(self):
        return self._table[UNKNOWN_TYPE]

    def lookup(self, source_type: str) -> str:
        target = self._table.get(source_type)
        if target is not None:
            return target
        if self.policy is UnmappedTypePolicy.FAIL:
            raise UnmappedTypeError(source_type)
        if source_type not in self._warned:
            self._warned.add(source_type)
            logger.warning("unmapped_type_fallback", source_type=source_type, target_type=self.fallback)
        return self.fallback
