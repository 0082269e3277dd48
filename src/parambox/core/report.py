# どこで: `src/parambox/core/report.py`。
# 何を: Registry の宣言内容（型/値/レンジ/リスト/説明）を人間向けテキストへ整形する。
# なぜ: 行モデル生成と文字列整形を純粋関数に分け、表示内容を単体テスト可能に保つため。

from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

from .conditions import describe_list, describe_range
from .registry import Registry
from .runtime_config import runtime_config

_RULE = "-" * 28


@dataclass(frozen=True, slots=True)
class ReportRow:
    """レポート 1 パラメータ分の表示モデル。"""

    name: str
    kind: str
    value: str | None
    range_text: str | None
    list_label: str | None
    list_text: str | None
    explanation: str | None


def rows_from_registry(registry: Registry) -> list[ReportRow]:
    """hidden でないスロットを宣言順に ReportRow へ変換する。"""

    rows: list[ReportRow] = []
    for slot in registry._slots_ref():
        if slot.hidden:
            continue
        cond = slot.list_condition
        rows.append(
            ReportRow(
                name=slot.name,
                kind=slot.kind,
                value=None if not slot.is_set else str(slot.value),
                range_text=describe_range(slot.name, slot.min_bound, slot.max_bound),
                list_label=None if cond is None else cond.label,
                list_text=None if cond is None else describe_list(cond),
                explanation=slot.explanation,
            )
        )
    return rows


def format_report(registry: Registry, *, column_width: int | None = None) -> str:
    """レポート文字列を返す。column_width が None なら config の `report.column_width`。"""

    if column_width is None:
        column_width = runtime_config().report_column_width

    def field(label: str, text: str) -> str:
        return f"{label:<{column_width}}| {text}"

    lines: list[str] = []
    for row in rows_from_registry(registry):
        lines.append(row.name)
        lines.append(_RULE)
        lines.append(field("Type", row.kind))
        if row.value is not None:
            lines.append(field("Value", row.value))
        if row.range_text is not None:
            lines.append(field("Range", row.range_text))
        if row.list_label is not None and row.list_text is not None:
            lines.append(field(row.list_label, row.list_text))
        if row.explanation is not None:
            lines.append(field("Explanation", row.explanation))
        lines.append("")
    return "\n".join(lines) + ("\n" if lines else "")


def write_report(registry: Registry, stream: TextIO, *, column_width: int | None = None) -> None:
    stream.write(format_report(registry, column_width=column_width))


__all__ = ["ReportRow", "rows_from_registry", "format_report", "write_report"]
