"""
提交导出 - CSV / Excel

表头：["submitted_at", "tags", ...各提交中出现过的标签（按首次出现顺序）]
每行缺少的标签填空串。显示值全部来自 format_answers，和详情页一致。

依赖：
- csv: CSV 写入（UTF-8 BOM，方便表格软件直接打开）
- openpyxl: Excel 写入

测试要点：
- test_header_first_seen_order: 表头顺序
- test_missing_label_blank: 缺失补空串
- test_write_csv_bom: CSV 带 BOM
- test_write_xlsx: Excel 可读回
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable

from openpyxl import Workbook
from pydantic import BaseModel, Field

from ..config import EngineConfig, get_config
from ..interfaces import ExportError
from ..models import FormSchema, Submission
from .formatting import format_answers

logger = logging.getLogger(__name__)

FIXED_COLUMNS = ("submitted_at", "tags")


class ExportTable(BaseModel):
    """导出表（表头 + 行）"""
    header: list[str] = Field(default_factory=lambda: list(FIXED_COLUMNS))
    rows: list[list[str]] = Field(default_factory=list)


def build_export_table(
    entries: Iterable[tuple[Submission, FormSchema]],
    config: EngineConfig | None = None,
) -> ExportTable:
    """
    构建导出表

    Args:
        entries: (提交, 该提交对应的表单结构) 序列，按期望的输出顺序
    """
    cfg = config or get_config()
    labels: list[str] = []
    seen: set[str] = set()
    records: list[tuple[str, str, dict[str, str]]] = []

    for submission, schema in entries:
        values: dict[str, str] = {}
        for label, value in format_answers(schema, submission.data, cfg):
            if label not in seen:
                seen.add(label)
                labels.append(label)
            # 同名标签保留第一个
            values.setdefault(label, value)

        submitted_at = ""
        if submission.created_at is not None:
            submitted_at = submission.created_at.strftime(cfg.export.timestamp_format)
        tags = cfg.display.tag_separator.join(submission.tags)
        records.append((submitted_at, tags, values))

    rows = [[ts, tags] + [values.get(label, "") for label in labels] for ts, tags, values in records]
    return ExportTable(header=list(FIXED_COLUMNS) + labels, rows=rows)


def write_csv(table: ExportTable, path: str | Path) -> Path:
    """写出 CSV（UTF-8 BOM）"""
    out = Path(path)
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        with open(out, "w", encoding="utf-8-sig", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(table.header)
            writer.writerows(table.rows)
    except OSError as e:
        raise ExportError(f"CSV写入失败: {out}: {e}") from e

    logger.info(f"已导出CSV: {out}（{len(table.rows)} 行）")
    return out


def write_xlsx(table: ExportTable, path: str | Path, config: EngineConfig | None = None) -> Path:
    """写出 Excel"""
    out = Path(path)
    cfg = config or get_config()

    wb = Workbook()
    ws = wb.active
    ws.title = cfg.export.sheet_title
    ws.append(table.header)
    for row in table.rows:
        ws.append(row)

    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        wb.save(out)
    except OSError as e:
        raise ExportError(f"Excel写入失败: {out}: {e}") from e

    logger.info(f"已导出Excel: {out}（{len(table.rows)} 行）")
    return out


def write_table(table: ExportTable, path: str | Path, config: EngineConfig | None = None) -> Path:
    """按后缀选择 CSV / Excel"""
    suffix = Path(path).suffix.lower()
    if suffix == ".csv":
        return write_csv(table, path)
    if suffix == ".xlsx":
        return write_xlsx(table, path, config)
    raise ExportError(f"不支持的导出格式: {suffix or path}")
