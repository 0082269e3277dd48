# どこで: `src/parambox/core/conditions.py`。
# 何を: スロット値に課すレンジ条件（開/閉境界）とブラック/ホワイトリスト条件を定義する。
# なぜ: 値の検証ルールを Registry 本体から分離し、単体テスト可能な純粋関数に保つため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Bound:
    """レンジの片側境界。closed=True なら境界値を含む。"""

    value: Any
    closed: bool

    @classmethod
    def open(cls, value: Any) -> "Bound":
        return cls(value=value, closed=False)

    @classmethod
    def close(cls, value: Any) -> "Bound":
        return cls(value=value, closed=True)


@dataclass(frozen=True, slots=True)
class ListCondition:
    """値の候補リスト。whitelist=True なら列挙値のみ許可、False なら列挙値を禁止。"""

    items: tuple[Any, ...]
    whitelist: bool

    @property
    def label(self) -> str:
        return "Whitelist" if self.whitelist else "Blacklist"


def _format_items(items: tuple[Any, ...]) -> str:
    return "[" + ", ".join(str(x) for x in items) + "]"


def check_min(value: Any, bound: Bound | None) -> str | None:
    """下限を満たさなければ条件文字列（例: ``">= 1"``）を返す。満たせば None。"""

    if bound is None:
        return None
    if bound.closed:
        return None if value >= bound.value else f">= {bound.value}"
    return None if value > bound.value else f"> {bound.value}"


def check_max(value: Any, bound: Bound | None) -> str | None:
    """上限を満たさなければ条件文字列（例: ``"< 10"``）を返す。満たせば None。"""

    if bound is None:
        return None
    if bound.closed:
        return None if value <= bound.value else f"<= {bound.value}"
    return None if value < bound.value else f"< {bound.value}"


def check_list(value: Any, condition: ListCondition | None) -> str | None:
    """リスト条件に違反していれば条件文字列を返す。満たせば None。"""

    if condition is None:
        return None
    contained = value in condition.items
    if condition.whitelist and not contained:
        return f"in the list {_format_items(condition.items)}"
    if not condition.whitelist and contained:
        return f"not in the list {_format_items(condition.items)}"
    return None


def first_violation(
    value: Any,
    *,
    min_bound: Bound | None,
    max_bound: Bound | None,
    list_condition: ListCondition | None,
) -> str | None:
    """min → max → list の順に検査し、最初の違反条件を返す。"""

    for violation in (
        check_min(value, min_bound),
        check_max(value, max_bound),
        check_list(value, list_condition),
    ):
        if violation is not None:
            return violation
    return None


def describe_range(name: str, min_bound: Bound | None, max_bound: Bound | None) -> str | None:
    """``"0 < name <= 10"`` 形式のレンジ表記を返す。境界が無ければ None。"""

    parts: list[str] = []
    if min_bound is not None:
        parts.append(f"{min_bound.value} {'<=' if min_bound.closed else '<'}")
    parts.append(name)
    if max_bound is not None:
        parts.append(f"{'<=' if max_bound.closed else '<'} {max_bound.value}")
    if len(parts) == 1:
        return None
    return " ".join(parts)


def describe_list(condition: ListCondition) -> str:
    return _format_items(condition.items)


__all__ = [
    "Bound",
    "ListCondition",
    "check_min",
    "check_max",
    "check_list",
    "first_violation",
    "describe_range",
    "describe_list",
]
