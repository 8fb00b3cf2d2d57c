"""
命令行工具 - 检查表单结构、格式化/导出提交

用法：
    form-engine check form.json
    form-engine format form.json submissions.json
    form-engine export form.json submissions.json out.xlsx

表单文件可以是表单结构（{version, fields, presentation}），
也可以是表单记录（{name, schema: {...}}）；JSON/YAML 均可。
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any

import yaml

from .builder import check_schema
from .config import get_config, reload_config
from .interfaces import FormEngineError
from .layout import group_rows
from .models import FormSchema, Submission
from .submission import build_export_table, format_answers, write_table

logger = logging.getLogger(__name__)


def _read_document(path: Path) -> Any:
    """读取 JSON/YAML 文档（JSON 是 YAML 的子集）"""
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


def load_schema_file(path: Path) -> tuple[FormSchema, str | None]:
    """读取表单文件，返回 (表单结构, 表单名称或 None)"""
    data = _read_document(path) or {}
    if isinstance(data, dict) and "schema" in data:
        return FormSchema.from_storage(data["schema"] or {}), data.get("name")
    return FormSchema.from_storage(data), None


def load_submissions_file(path: Path) -> list[Submission]:
    """读取提交文件（列表，或 {submissions: [...]}）"""
    data = _read_document(path) or []
    if isinstance(data, dict):
        data = data.get("submissions", [])
    return [Submission.model_validate(item) for item in data]


def _field_title(field: Any) -> str:
    return field.label or f"<{field.kind}>"


def cmd_check(args: argparse.Namespace) -> int:
    schema, name = load_schema_file(Path(args.schema))

    print(f"字段数: {len(schema.fields)}")
    for i, row in enumerate(group_rows(schema.fields), start=1):
        print(f"  第{i}行: {' | '.join(_field_title(f) for f in row.fields)}")

    issues = check_schema(schema, name, require_contact=not args.no_contact)
    if not issues:
        print("检查通过")
        return 0

    print(f"发现 {len(issues)} 个问题:")
    for issue in issues:
        where = f"#{issue.index + 1} " if issue.index is not None else ""
        print(f"  - [{issue.code.value}] {where}{issue.message}")
    return 1


def cmd_format(args: argparse.Namespace) -> int:
    schema, _ = load_schema_file(Path(args.schema))
    submissions = load_submissions_file(Path(args.submissions))

    for submission in submissions:
        print(f"[{submission.id}]")
        for label, value in format_answers(schema, submission.data):
            print(f"  {label}: {value}")
        if submission.tags:
            print(f"  标签: {get_config().display.tag_separator.join(submission.tags)}")
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    schema, _ = load_schema_file(Path(args.schema))
    submissions = load_submissions_file(Path(args.submissions))

    table = build_export_table((s, schema) for s in submissions)
    out = write_table(table, Path(args.output))
    print(f"已导出 {len(table.rows)} 条提交: {out}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="form-engine",
        description="开放日表单引擎：检查表单结构、格式化与导出提交",
    )
    parser.add_argument("--config", default="", help="配置文件（默认：config/form_engine.yaml）")
    sub = parser.add_subparsers(dest="command", required=True)

    p_check = sub.add_parser("check", help="检查表单结构并显示成行结果")
    p_check.add_argument("schema", help="表单文件（JSON/YAML）")
    p_check.add_argument("--no-contact", action="store_true", help="不要求手机号/邮箱字段")
    p_check.set_defaults(func=cmd_check)

    p_format = sub.add_parser("format", help="按表单显示提交内容")
    p_format.add_argument("schema", help="表单文件（JSON/YAML）")
    p_format.add_argument("submissions", help="提交文件（JSON/YAML 列表）")
    p_format.set_defaults(func=cmd_format)

    p_export = sub.add_parser("export", help="导出提交为 CSV/Excel（按后缀）")
    p_export.add_argument("schema", help="表单文件（JSON/YAML）")
    p_export.add_argument("submissions", help="提交文件（JSON/YAML 列表）")
    p_export.add_argument("output", help="输出文件（.csv 或 .xlsx）")
    p_export.set_defaults(func=cmd_export)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    config = reload_config(args.config) if args.config else get_config()
    logging.basicConfig(
        level=getattr(logging, config.logging.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except (OSError, ValueError, FormEngineError) as exc:
        logger.error(f"{args.command} 失败: {exc}")
        print(f"错误: {exc}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
