# どこで: `src/parambox/core/slot.py`。
# 何を: ParameterSlot（宣言済みパラメータ 1 件分の型付き格納セル）を定義する。
# なぜ: kind・値・条件・説明を 1 単位で扱い、Registry からはコピーだけを外へ渡すため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .conditions import Bound, ListCondition


@dataclass(slots=True)
class ParameterSlot:
    """単一パラメータのスロット。

    kind は宣言後に変えない。value は None（未設定）か、kind に一致する値のどちらか。
    """

    name: str
    kind: str
    value: Any = None
    min_bound: Bound | None = None
    max_bound: Bound | None = None
    list_condition: ListCondition | None = None
    explanation: str | None = None
    hidden: bool = False

    @property
    def is_set(self) -> bool:
        return self.value is not None


__all__ = ["ParameterSlot"]
