"""
导出与命令行单元测试

每个模块完成后必须运行：pytest backend/tests/unit/test_export.py -v
"""

import csv
import json
from datetime import datetime
from pathlib import Path

import pytest
from openpyxl import load_workbook

from form_engine.cli import main
from form_engine.interfaces import ExportError
from form_engine.models import CheckboxField, FormSchema, Submission
from form_engine.submission import ExportTable, build_export_table, write_csv, write_table, write_xlsx


@pytest.fixture
def entries(scenario_schema: FormSchema):
    """两份表单的提交（第二份表单多了一个勾选字段、少了邮箱）"""
    other = FormSchema(fields=[
        scenario_schema.fields[0],
        CheckboxField(key="agent", label="已有经纪人"),
    ])
    return [
        (
            Submission(
                id="s1",
                data={"full_name": "Alice Lee", "phone": "4161234567"},
                tags=["vip", "hot"],
                created_at=datetime(2026, 3, 1, 9, 5),
            ),
            scenario_schema,
        ),
        (
            Submission(id="s2", data={"full_name": "Bob", "agent": True}),
            other,
        ),
    ]


class TestBuildExportTable:
    """导出表测试"""

    def test_header_first_seen_order(self, entries):
        """测试表头按首次出现顺序"""
        table = build_export_table(entries)
        assert table.header == ["submitted_at", "tags", "姓名", "手机号", "已有经纪人"]

    def test_rows(self, entries):
        """测试缺失标签补空串"""
        table = build_export_table(entries)
        assert table.rows == [
            ["2026-03-01 09:05", "vip, hot", "Alice Lee", "4161234567", ""],
            ["", "", "Bob", "", "是"],
        ]

    def test_empty(self):
        table = build_export_table([])
        assert table.header == ["submitted_at", "tags"]
        assert table.rows == []


class TestWriters:
    """文件写出测试"""

    def test_write_csv_bom(self, entries, temp_dir: Path):
        """测试 CSV 带 BOM 且可读回"""
        table = build_export_table(entries)
        out = write_csv(table, temp_dir / "out" / "submissions.csv")

        assert out.read_bytes().startswith(b"\xef\xbb\xbf")
        with open(out, encoding="utf-8-sig", newline="") as f:
            rows = list(csv.reader(f))
        assert rows[0] == table.header
        assert rows[1:] == table.rows

    def test_write_xlsx(self, entries, temp_dir: Path):
        """测试 Excel 可读回"""
        table = build_export_table(entries)
        out = write_xlsx(table, temp_dir / "submissions.xlsx")

        wb = load_workbook(out)
        ws = wb.active
        assert ws.title == "提交记录"
        assert [c.value for c in ws[1]] == table.header
        assert ws.cell(row=2, column=3).value == "Alice Lee"
        assert ws.cell(row=3, column=5).value == "是"

    def test_write_table_by_suffix(self, temp_dir: Path):
        table = ExportTable()
        assert write_table(table, temp_dir / "a.csv").suffix == ".csv"
        assert write_table(table, temp_dir / "a.xlsx").suffix == ".xlsx"
        with pytest.raises(ExportError):
            write_table(table, temp_dir / "a.pdf")


class TestCli:
    """命令行测试"""

    @pytest.fixture
    def schema_file(self, scenario_schema: FormSchema, temp_dir: Path) -> Path:
        path = temp_dir / "form.json"
        path.write_text(
            json.dumps({"name": "访客登记", "schema": scenario_schema.to_storage()}, ensure_ascii=False),
            encoding="utf-8",
        )
        return path

    @pytest.fixture
    def submissions_file(self, temp_dir: Path) -> Path:
        path = temp_dir / "submissions.json"
        path.write_text(
            json.dumps([{"id": "s1", "data": {"full_name": "Alice Lee", "phone": "4161234567"}, "tags": "vip"}]),
            encoding="utf-8",
        )
        return path

    def test_check_ok(self, schema_file: Path, capsys: pytest.CaptureFixture):
        assert main(["check", str(schema_file)]) == 0
        assert "检查通过" in capsys.readouterr().out

    def test_check_issues(self, temp_dir: Path, capsys: pytest.CaptureFixture):
        path = temp_dir / "bad.json"
        path.write_text(json.dumps({"version": 1, "fields": [{"key": "s", "type": "splice"}, {"key": "a", "type": "text"}]}))

        assert main(["check", str(path)]) == 1
        out = capsys.readouterr().out
        assert "splice_at_start" in out
        assert "contact_field_missing" in out

    def test_format(self, schema_file: Path, submissions_file: Path, capsys: pytest.CaptureFixture):
        assert main(["format", str(schema_file), str(submissions_file)]) == 0
        out = capsys.readouterr().out
        assert "姓名: Alice Lee" in out
        assert "手机号: 4161234567" in out

    def test_export(self, schema_file: Path, submissions_file: Path, temp_dir: Path):
        out = temp_dir / "out.csv"
        assert main(["export", str(schema_file), str(submissions_file), str(out)]) == 0
        assert out.exists()

    def test_missing_file(self, temp_dir: Path):
        assert main(["check", str(temp_dir / "missing.json")]) == 2
