"""Tests for the /mappings endpoint."""

import io

from fastapi.testclient import TestClient
from openpyxl import load_workbook


class TestGenerateMapping:
    """Tests for POST /mappings/generate."""

    def test_workbook_rows(self, test_client: TestClient, foo_dump):
        response = test_client.post("/mappings/generate", json={"dump": foo_dump, "source_dsn": "mydsn"})
        assert response.status_code == 200

        wb = load_workbook(io.BytesIO(response.content))
        assert wb.sheetnames == ["Data Mapping", "Mapping Information"]

        rows = list(wb["Data Mapping"].iter_rows(values_only=True))
        assert rows[0][0] == "Seq#"
        assert rows[1] == (1, "HR", "FOO", "A", "VARCHAR2", 20, 0, "Y", "ora_FOO", "A", "String")
        assert rows[2] == (2, "HR", "FOO", "B", "NUMBER", 22, 10, "N", "ora_FOO", "B", "Decimal256(30)")

        info = list(wb["Mapping Information"].iter_rows(values_only=True))
        assert info[1][1:] == ("mydsn", "ora_", None, 1, 2)

    def test_unmapped_type_fail_policy(self, test_client: TestClient, make_dump, row):
        response = test_client.post(
            "/mappings/generate",
            json={
                "dump": make_dump([row("HR", "DOCS", "F", "BFILE")]),
                "source_dsn": "mydsn",
                "unmapped_policy": "fail",
            },
        )
        assert response.status_code == 422
