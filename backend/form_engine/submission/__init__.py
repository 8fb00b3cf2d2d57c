"""
提交数据模块

子模块：
- projection: 现场答案 ↔ 提交 JSON
- formatting: 提交 JSON → (标签, 显示值)，所有读取端共用
- validation: 必填与格式校验
- export: CSV / Excel 导出
"""

from .export import ExportTable, build_export_table, write_csv, write_table, write_xlsx
from .formatting import AnswerPair, format_answers, format_field
from .projection import coerce_field, seed_answers, serialize_answers
from .validation import (
    check_formats,
    check_required,
    check_submission,
    ensure_submission_valid,
    is_valid_email,
)

__all__ = [
    "serialize_answers",
    "seed_answers",
    "coerce_field",
    "AnswerPair",
    "format_answers",
    "format_field",
    "is_valid_email",
    "check_required",
    "check_formats",
    "check_submission",
    "ensure_submission_valid",
    "ExportTable",
    "build_export_table",
    "write_csv",
    "write_xlsx",
    "write_table",
]
