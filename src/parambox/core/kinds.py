# どこで: `src/parambox/core/kinds.py`。
# 何を: 型タグ（kind）と、テキスト/Python 値をその kind へ変換する関数を提供する。
# なぜ: kind ごとに「成功か失敗か」の変換を 1 つに固定し、Registry から型分岐を追い出すため。

from __future__ import annotations

import re
from math import isfinite
from typing import Any

import numpy as np

from .errors import TypeCoercionError

_INT_DTYPES: dict[str, type[np.integer]] = {
    "i8": np.int8,
    "i16": np.int16,
    "i32": np.int32,
    "i64": np.int64,
    "u8": np.uint8,
    "u16": np.uint16,
    "u32": np.uint32,
    "u64": np.uint64,
}

# kind -> (min, max)。"int" は上下限なし。
_INT_BOUNDS: dict[str, tuple[int | None, int | None]] = {
    "int": (None, None),
    **{
        kind: (int(np.iinfo(dtype).min), int(np.iinfo(dtype).max))
        for kind, dtype in _INT_DTYPES.items()
    },
    # numpy に 128bit 整数型は無いので境界を直接持つ。
    "i128": (-(2**127), 2**127 - 1),
    "u128": (0, 2**128 - 1),
}

INT_KINDS = frozenset(_INT_BOUNDS)
FLOAT_KINDS = frozenset({"float", "f32", "f64"})
KINDS = INT_KINDS | FLOAT_KINDS | {"str", "bool"}

_PY_TYPE_KINDS: dict[type, str] = {int: "int", float: "float", str: "str", bool: "bool"}

_INT_RE = re.compile(r"-?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_TRUE_WORDS = frozenset({"true", "1", "on", "yes"})
_FALSE_WORDS = frozenset({"false", "0", "off", "no"})


def kind_from_spec(spec: str | type) -> str:
    """kind 名または Python 型から kind 名を返す。

    Parameters
    ----------
    spec : str | type
        ``"int"`` / ``"u8"`` / ``"f32"`` などの kind 名、
        または ``int`` / ``float`` / ``str`` / ``bool``。

    Raises
    ------
    TypeError
        spec が str でも型でもない場合。
    ValueError
        未知の kind の場合。
    """

    if isinstance(spec, type):
        kind = _PY_TYPE_KINDS.get(spec)
        if kind is None:
            raise ValueError(f"対応していない型です: {spec.__name__}")
        return kind
    if not isinstance(spec, str):
        raise TypeError("kind は str または型である必要があります")
    if spec not in KINDS:
        names = ", ".join(sorted(KINDS))
        raise ValueError(f"未知の kind です: {spec!r}（利用可能: {names}）")
    return spec


def _check_int_bounds(value: int, kind: str, text: str) -> int:
    lo, hi = _INT_BOUNDS[kind]
    if (lo is not None and value < lo) or (hi is not None and value > hi):
        raise TypeCoercionError(text, kind)
    return value


def _round_float(value: float, kind: str, text: str) -> float:
    if kind == "f32":
        with np.errstate(over="ignore"):
            value = float(np.float32(value))
    if not isfinite(value):
        raise TypeCoercionError(text, kind)
    return value


def parse_text(kind: str, text: str) -> Any:
    """前後空白を除いた text を kind の値へ変換して返す。

    Raises
    ------
    TypeCoercionError
        text が kind の文法に合わない、または範囲外の場合。
    """

    s = text.strip()

    if kind in INT_KINDS:
        if _INT_RE.fullmatch(s) is None:
            raise TypeCoercionError(s, kind)
        try:
            value = int(s)
        except ValueError:
            # 桁数上限（sys.int_info.str_digits_check_threshold 超）で int() が失敗する。
            raise TypeCoercionError(s, kind) from None
        return _check_int_bounds(value, kind, s)

    if kind in FLOAT_KINDS:
        if _FLOAT_RE.fullmatch(s) is None:
            raise TypeCoercionError(s, kind)
        return _round_float(float(s), kind, s)

    if kind == "str":
        return s

    if kind == "bool":
        lowered = s.lower()
        if lowered in _TRUE_WORDS:
            return True
        if lowered in _FALSE_WORDS:
            return False
        raise TypeCoercionError(s, kind)

    raise ValueError(f"未知の kind です: {kind!r}")


def coerce_value(kind: str, value: Any) -> Any:
    """型付きの Python 値を kind の正規形へ寄せて返す。

    bool は int/float として受け付けない（True が 1 に化けるのを防ぐ）。
    """

    try:
        text = str(value)
    except ValueError:
        # 桁数上限を超える int は str() できない。
        text = f"<{type(value).__name__}>"

    if kind in INT_KINDS:
        if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
            raise TypeCoercionError(text, kind)
        return _check_int_bounds(int(value), kind, text)

    if kind in FLOAT_KINDS:
        if isinstance(value, (bool, np.bool_)) or not isinstance(
            value, (int, float, np.integer, np.floating)
        ):
            raise TypeCoercionError(text, kind)
        return _round_float(float(value), kind, text)

    if kind == "str":
        if not isinstance(value, str):
            raise TypeCoercionError(text, kind)
        return value

    if kind == "bool":
        if not isinstance(value, (bool, np.bool_)):
            raise TypeCoercionError(text, kind)
        return bool(value)

    raise ValueError(f"未知の kind です: {kind!r}")


def is_ordered(kind: str) -> bool:
    """レンジ条件（大小比較）を持てる kind なら True。"""

    return kind in INT_KINDS or kind in FLOAT_KINDS or kind == "str"


__all__ = [
    "KINDS",
    "INT_KINDS",
    "FLOAT_KINDS",
    "kind_from_spec",
    "parse_text",
    "coerce_value",
    "is_ordered",
]
