# どこで: `src/parambox/core/registry.py`。
# 何を: Registry（名前 -> ParameterSlot）を定義する。
# なぜ: 「名前は一度だけ宣言、kind は宣言時に固定」を 1 箇所で保証し、値の変換/検証/読み出しをまとめるため。

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from .conditions import Bound, ListCondition, first_violation
from .errors import (
    ConditionViolationError,
    DuplicateParameterError,
    ParamBoxError,
    TypeCoercionError,
    UnknownParameterError,
    ValueNotSetError,
)
from .kinds import coerce_value, is_ordered, kind_from_spec, parse_text
from .line_parser import parse
from .slot import ParameterSlot

_logger = logging.getLogger(__name__)


class Registry:
    """宣言済みパラメータの型付きレジストリ。

    Notes
    -----
    - 宣言順を保持する（反復とレポートの順序）。
    - 外部へはミュータブルな参照（ParameterSlot）を渡さない。
    - 内部ロックは持たない。複数スレッドで共有する場合は呼び出し側で排他すること。
    """

    def __init__(self) -> None:
        self._slots: dict[str, ParameterSlot] = {}
        self._error_count = 0

    # --- 宣言 ---
    def declare(self, name: str, kind: str | type) -> None:
        """name を kind で宣言する。

        Raises
        ------
        DuplicateParameterError
            name が既に宣言済みの場合（既存スロットは変更しない）。
        ValueError
            name が空、または kind が未知の場合。
        """

        if not isinstance(name, str) or not name:
            raise ValueError("パラメータ名は空でない str である必要があります")
        resolved = kind_from_spec(kind)
        if name in self._slots:
            raise self._fail(DuplicateParameterError(name))
        self._slots[name] = ParameterSlot(name=name, kind=resolved)

    # --- 値の設定 ---
    def set_value(self, name: str, raw_text: str) -> None:
        """raw_text を name の kind へ変換して格納する（後勝ち）。

        Raises
        ------
        UnknownParameterError
            name が未宣言の場合。
        TypeCoercionError
            raw_text を kind へ変換できない場合。
        ConditionViolationError
            変換後の値がレンジ/リスト条件を満たさない場合（旧値を保持する）。
        """

        slot = self._require(name)
        try:
            value = parse_text(slot.kind, raw_text)
        except TypeCoercionError as exc:
            raise self._fail(TypeCoercionError(exc.text, exc.kind, name=name)) from None
        self._store(slot, value)

    def assign(self, name: str, value: Any) -> None:
        """型付きの Python 値を name に格納する。"""

        slot = self._require(name)
        try:
            coerced = coerce_value(slot.kind, value)
        except TypeCoercionError as exc:
            raise self._fail(TypeCoercionError(exc.text, exc.kind, name=name)) from None
        self._store(slot, coerced)

    def _store(self, slot: ParameterSlot, value: Any) -> None:
        violation = first_violation(
            value,
            min_bound=slot.min_bound,
            max_bound=slot.max_bound,
            list_condition=slot.list_condition,
        )
        if violation is not None:
            raise self._fail(ConditionViolationError(slot.name, value, violation))
        slot.value = value

    # --- 読み出し ---
    def get_value(self, name: str) -> Any:
        """name の値を返す。

        kind が生成する値はすべて immutable なので、戻り値から内部スロットは変更できない。

        Raises
        ------
        UnknownParameterError
            name が未宣言の場合。
        ValueNotSetError
            値が未設定の場合。
        """

        slot = self._require(name)
        if not slot.is_set:
            raise self._fail(ValueNotSetError(name))
        return slot.value

    get = get_value

    def has_value(self, name: str) -> bool:
        """宣言済みスロットが値を持っていれば True。"""

        return self._require(name).is_set

    def expect_value(self, name: str) -> Any:
        """値を返す。失敗時はエラーをログに出して SystemExit(1) を送出する。

        成功を確認済みの呼び出し箇所向け。通常は get_value を使うこと。
        """

        try:
            return self.get_value(name)
        except ParamBoxError as exc:
            _logger.error("%s", exc)
            raise SystemExit(1) from exc

    def unset_names(self) -> list[str]:
        """値が未設定の名前を宣言順で返す。"""

        return [name for name, slot in self._slots.items() if not slot.is_set]

    def snapshot(self) -> dict[str, Any]:
        """値が設定済みのスロットについて name -> value のコピーを返す。"""

        return {name: slot.value for name, slot in self._slots.items() if slot.is_set}

    def slot(self, name: str) -> ParameterSlot:
        """name のスロットのコピーを返す。"""

        return dataclasses.replace(self._require(name))

    def kind_of(self, name: str) -> str:
        return self._require(name).kind

    def names(self) -> list[str]:
        return list(self._slots)

    @property
    def error_count(self) -> int:
        """このレジストリで失敗した操作の累計。"""

        return self._error_count

    # --- 条件/付帯情報 ---
    def set_range(self, name: str, min_bound: Bound, max_bound: Bound) -> None:
        """下限と上限を同時に設定する。"""

        slot = self._require(name)
        self._apply_conditions(
            slot,
            min_bound=self._checked_bound(slot, min_bound),
            max_bound=self._checked_bound(slot, max_bound),
            list_condition=slot.list_condition,
        )

    def set_min(self, name: str, bound: Bound) -> None:
        slot = self._require(name)
        self._apply_conditions(
            slot,
            min_bound=self._checked_bound(slot, bound),
            max_bound=slot.max_bound,
            list_condition=slot.list_condition,
        )

    def set_max(self, name: str, bound: Bound) -> None:
        slot = self._require(name)
        self._apply_conditions(
            slot,
            min_bound=slot.min_bound,
            max_bound=self._checked_bound(slot, bound),
            list_condition=slot.list_condition,
        )

    def set_blacklist(self, name: str, items: Iterable[Any]) -> None:
        """items に含まれる値を禁止する。"""

        self._set_list(name, items, whitelist=False)

    def set_whitelist(self, name: str, items: Iterable[Any]) -> None:
        """items に含まれる値だけを許可する。"""

        self._set_list(name, items, whitelist=True)

    def set_explanation(self, name: str, explanation: str) -> None:
        self._require(name).explanation = str(explanation)

    def set_hidden(self, name: str, hidden: bool = True) -> None:
        """レポート表示から除外する。"""

        self._require(name).hidden = bool(hidden)

    def _set_list(self, name: str, items: Iterable[Any], *, whitelist: bool) -> None:
        slot = self._require(name)
        if isinstance(items, (str, bytes)):
            raise TypeError("リスト条件には str ではなく値の列を渡してください")
        try:
            values = tuple(coerce_value(slot.kind, item) for item in items)
        except ParamBoxError as exc:
            raise self._fail(exc) from None
        self._apply_conditions(
            slot,
            min_bound=slot.min_bound,
            max_bound=slot.max_bound,
            list_condition=ListCondition(items=values, whitelist=whitelist),
        )

    def _checked_bound(self, slot: ParameterSlot, bound: Bound) -> Bound:
        if not isinstance(bound, Bound):
            raise TypeError("境界は Bound.open(...) または Bound.close(...) で指定してください")
        if not is_ordered(slot.kind):
            raise ValueError(f"kind={slot.kind} のパラメータにはレンジを設定できません")
        try:
            value = coerce_value(slot.kind, bound.value)
        except ParamBoxError as exc:
            raise self._fail(exc) from None
        return Bound(value=value, closed=bound.closed)

    def _apply_conditions(
        self,
        slot: ParameterSlot,
        *,
        min_bound: Bound | None,
        max_bound: Bound | None,
        list_condition: ListCondition | None,
    ) -> None:
        # 現在値が新条件に違反するなら条件を適用しない。
        if slot.is_set:
            violation = first_violation(
                slot.value,
                min_bound=min_bound,
                max_bound=max_bound,
                list_condition=list_condition,
            )
            if violation is not None:
                raise self._fail(ConditionViolationError(slot.name, slot.value, violation))
        slot.min_bound = min_bound
        slot.max_bound = max_bound
        slot.list_condition = list_condition

    # --- ロード ---
    def load(
        self,
        lines: Iterable[str],
        *,
        source: str | None = None,
        reject_duplicates: bool = False,
    ) -> None:
        """`name value` 行の列を読み、各スロットへ値を設定する（fail-fast）。

        失敗時は LoadError を送出する。それまでに成功した行の値は残る。
        """

        parse(lines, self, source=source, reject_duplicates=reject_duplicates)

    # --- 内部 API ---
    def _require(self, name: str) -> ParameterSlot:
        slot = self._slots.get(name)
        if slot is None:
            raise self._fail(UnknownParameterError(name))
        return slot

    def _fail(self, exc: ParamBoxError) -> ParamBoxError:
        self._error_count += 1
        return exc

    def _slots_ref(self) -> Sequence[ParameterSlot]:
        return tuple(self._slots.values())

    # --- コンテナプロトコル ---
    def __contains__(self, name: object) -> bool:
        return name in self._slots

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._slots))


__all__ = ["Registry"]
