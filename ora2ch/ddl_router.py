# ddl_router.py
import os
import shutil
import tempfile
from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse
from pydantic import BaseModel
from starlette.background import BackgroundTask

from ora2ch.config import load_settings
from ora2ch.errors import (
    CatalogConnectionError,
    CatalogFileError,
    CatalogQueryError,
    ConfigError,
    Ora2ChError,
    OutputWriteError,
    ParseError,
    UnmappedTypeError,
)
from ora2ch.pipeline import convert_records, read_catalog
from ora2ch.schema_parser import parse_catalog_dump
from ora2ch.table_catalog import TableIdentity, selected_tables
from ora2ch.type_mapping import UnmappedTypePolicy

router = APIRouter(prefix="/ddl", tags=["DDL"])

ERROR_STATUS = {
    ConfigError: 400,
    ParseError: 422,
    UnmappedTypeError: 422,
    CatalogConnectionError: 502,
    CatalogQueryError: 502,
    CatalogFileError: 500,
    OutputWriteError: 500,
}


class DDLRequest(BaseModel):
    # dump text to convert; when empty the live catalog from the environment is used
    dump: Optional[str] = None
    table_prefix: Optional[str] = None
    source_dsn: Optional[str] = None
    owner: Optional[str] = None
    unmapped_policy: Optional[UnmappedTypePolicy] = None
    table_identity: Optional[TableIdentity] = None


class DDLResponse(BaseModel):
    tables: list[str]
    ddl: str


def to_http_error(err: Ora2ChError):
    for err_type, status in ERROR_STATUS.items():
        if isinstance(err, err_type):
            return HTTPException(status, str(err))
    return HTTPException(500, str(err))


def settings_for(req: DDLRequest):
    overrides = dict(
        source_dsn=req.source_dsn,
        owner_filter=req.owner,
        table_prefix=req.table_prefix,
        unmapped_policy=req.unmapped_policy,
        table_identity=req.table_identity,
    )
    settings = load_settings(**overrides)
    if req.dump is not None:
        # the request body replaces whatever input the environment selects
        settings = settings.model_copy(update={
            "dump_file": "<request>",
            "catalog_dsn": None,
            "source_dsn": settings.resolved_source_dsn(),
        })
    return settings.validate_mode()


def load_records(req: DDLRequest, settings):
    if req.dump is not None:
        return parse_catalog_dump(req.dump)
    return read_catalog(settings)


def build_ddl(req: DDLRequest):
    settings = settings_for(req)
    records = load_records(req, settings)
    ddl = convert_records(records, settings)
    return settings, records, ddl


@router.post("/generate", response_model=DDLResponse, summary="Generate ClickHouse DDL from an Oracle catalog")
def generate_ddl(req: DDLRequest):
    try:
        settings, records, ddl = build_ddl(req)
    except Ora2ChError as e:
        raise to_http_error(e) from e
    tables = selected_tables(records, settings)
    return DDLResponse(tables=[t.table_name for t in tables], ddl=ddl)


@router.post("/download", summary="Generate ClickHouse DDL and return .sql file")
def download_ddl(req: DDLRequest):
    try:
        settings, _, ddl = build_ddl(req)
    except Ora2ChError as e:
        raise to_http_error(e) from e

    tmpdir = tempfile.mkdtemp()
    fname = f"{settings.table_prefix}clickhouse.sql"
    path = os.path.join(tmpdir, fname)
    with open(path, "w", encoding="utf-8") as f:
        f.write(ddl)
    return FileResponse(
        path=path,
        media_type="application/sql",
        filename=fname,
        background=BackgroundTask(shutil.rmtree, tmpdir, ignore_errors=True),
    )
