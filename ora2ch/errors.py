# errors.py
"""Error types raised by the conversion pipeline.

Every error is terminal for the run. Only the CLI entry point and the HTTP
routers translate them into exit codes / responses.
"""


class Ora2ChError(Exception):
    """Base class for all conversion errors."""


class ConfigError(Ora2ChError):
    """Missing or contradictory settings, raised before any parsing."""


class CatalogConnectionError(Ora2ChError):
    """The source catalog could not be reached."""


class CatalogQueryError(Ora2ChError):
    """The catalog query failed or returned rows of the wrong shape."""


class CatalogFileError(Ora2ChError):
    """The catalog dump file could not be read."""


class OutputWriteError(Ora2ChError):
    """The generated DDL could not be written and synced."""


class ParseError(Ora2ChError):
    def __init__(self, reason, line_index):
        super().__init__(f"{reason} at line {line_index}")
        self.reason = reason
        self.line_index = line_index


class UnmappedTypeError(Ora2ChError):
    def __init__(self, source_type):
        super().__init__(f"No ClickHouse type registered for Oracle type {source_type!r}")
        self.source_type = source_type
