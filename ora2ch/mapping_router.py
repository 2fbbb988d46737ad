import os
import shutil
import tempfile
from datetime import datetime

from fastapi import APIRouter
from fastapi.responses import FileResponse
from openpyxl import Workbook
from openpyxl.styles import Font
from starlette.background import BackgroundTask

from ora2ch.ddl_router import DDLRequest, load_records, settings_for, to_http_error
from ora2ch.errors import Ora2ChError
from ora2ch.table_catalog import group_columns, selected_tables, table_key
from ora2ch.type_mapping import TypeMapping

router = APIRouter(prefix="/mappings", tags=["Mappings"])

MAPPING_HEADERS = [
    "Seq#",
    "Source Schema",
    "Source Table Name",
    "Source Column Name",
    "Source Data type",
    "Data Length",
    "Data Precision",
    "Nullable \n(Y/N)",
    "Target Table Name",
    "Target Column Name",
    "Target Datatype",
]

INFO_HEADERS = [
    "Created Date",
    "Source DSN",
    "Table Prefix",
    "Owner Filter",
    "Tables",
    "Columns",
]


def mapping_rows(records, type_mapping, settings):
    """One row per column, grouped by table in first-seen order."""
    columns = group_columns(records, settings.table_identity)
    seq = 0
    for table in selected_tables(records, settings):
        target_table = f"{settings.table_prefix}{table.table_name}"
        for col in columns[table_key(table, settings.table_identity)]:
            seq += 1
            yield [
                seq,
                col.owner,
                col.table_name,
                col.column_name,
                col.data_type,
                col.data_length,
                col.data_precision,
                "Y" if col.nullable else "N",
                target_table,
                col.column_name,
                type_mapping.lookup(col.data_type),
            ]


def generate_mapping_excel(output_path, records, type_mapping, settings):
    wb = Workbook()
    ws_mapping = wb.active
    ws_mapping.title = "Data Mapping"
    ws_info = wb.create_sheet("Mapping Information")

    ws_mapping.append(MAPPING_HEADERS)
    tables = set()
    rows = 0
    for row in mapping_rows(records, type_mapping, settings):
        ws_mapping.append(row)
        tables.add(row[8])
        rows += 1

    ws_info.append(INFO_HEADERS)
    ws_info.append([
        datetime.now().strftime("%Y-%m-%d"),
        settings.source_dsn,
        settings.table_prefix,
        settings.owner_filter,
        len(tables),
        rows,
    ])

    for ws in (ws_mapping, ws_info):
        for cell in ws[1]:
            cell.font = Font(bold=True)

    wb.save(output_path)
    return rows


@router.post("/generate", response_class=FileResponse, summary="Column mapping workbook for the generated tables")
def generate_mapping(req: DDLRequest):
    try:
        settings = settings_for(req)
        records = load_records(req, settings)
    except Ora2ChError as e:
        raise to_http_error(e) from e

    ddl_settings = settings.ddl_settings()
    tmpdir = tempfile.mkdtemp()
    output_filename = f"{ddl_settings.table_prefix}mapping.xlsx"
    output_path = os.path.join(tmpdir, output_filename)
    try:
        generate_mapping_excel(
            output_path,
            records,
            TypeMapping.default(settings.unmapped_policy),
            ddl_settings,
        )
    except Ora2ChError as e:
        shutil.rmtree(tmpdir, ignore_errors=True)
        raise to_http_error(e) from e

    return FileResponse(
        output_path,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        filename=output_filename,
        background=BackgroundTask(shutil.rmtree, tmpdir, ignore_errors=True),
    )
