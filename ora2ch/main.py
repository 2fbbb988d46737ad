# main.py
from fastapi import FastAPI

from ora2ch.ddl_router import router as ddl_router
from ora2ch.mapping_router import router as mapping_router

app = FastAPI(
    title="Oracle→ClickHouse Tools",
    description="Generate ClickHouse ODBC-table DDL and column mappings from Oracle catalog metadata",
    version="1.0"
)

app.include_router(ddl_router)
app.include_router(mapping_router)
