"""Tests for the DDL output file writer."""

import pytest

from ora2ch import output_sink
from ora2ch.errors import OutputWriteError
from ora2ch.output_sink import save_ddl


class TestSaveDDL:

    def test_creates_file(self, tmp_path):
        path = tmp_path / "out.sql"
        save_ddl(str(path), "DROP TABLE IF EXISTS ora_T;\n")
        assert path.read_text(encoding="utf-8") == "DROP TABLE IF EXISTS ora_T;\n"

    def test_appends(self, tmp_path):
        path = tmp_path / "out.sql"
        path.write_text("-- existing\n", encoding="utf-8")

        save_ddl(str(path), "first\n\n")
        save_ddl(str(path), "second\n\n")
        assert path.read_text(encoding="utf-8") == "-- existing\nfirst\n\nsecond\n\n"

    def test_empty_ddl_still_creates_file(self, tmp_path):
        path = tmp_path / "out.sql"
        save_ddl(str(path), "")
        assert path.exists()
        assert path.read_text(encoding="utf-8") == ""

    def test_unwritable_location(self, tmp_path):
        with pytest.raises(OutputWriteError):
            save_ddl(str(tmp_path / "missing" / "out.sql"), "x")

    def test_failed_sync_rolls_back(self, tmp_path, monkeypatch):
        path = tmp_path / "out.sql"
        path.write_text("-- existing\n", encoding="utf-8")

        def broken_fsync(fd):
            raise OSError("disk full")

        monkeypatch.setattr(output_sink.os, "fsync", broken_fsync)

        with pytest.raises(OutputWriteError) as exc:
            save_ddl(str(path), "DROP TABLE IF EXISTS ora_T;\n")
        assert isinstance(exc.value.__cause__, OSError)
        assert path.read_text(encoding="utf-8") == "-- existing\n"
