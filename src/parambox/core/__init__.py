# どこで: `src/parambox/core/__init__.py`。
# 何を: レジストリ/ローダ/レポートの公開エイリアスをまとめる。
# なぜ: 呼び出し側から最小インポートで使えるようにするため。

from .conditions import Bound, ListCondition
from .errors import (
    ConditionViolationError,
    DuplicateKeyError,
    DuplicateParameterError,
    LoadError,
    MalformedLineError,
    ParamBoxError,
    TypeCoercionError,
    UnknownParameterError,
    ValueNotSetError,
)
from .kinds import KINDS, kind_from_spec
from .persistence import load_file, read_lines
from .registry import Registry
from .report import format_report, write_report
from .slot import ParameterSlot

__all__ = [
    "Bound",
    "ListCondition",
    "ConditionViolationError",
    "DuplicateKeyError",
    "DuplicateParameterError",
    "LoadError",
    "MalformedLineError",
    "ParamBoxError",
    "TypeCoercionError",
    "UnknownParameterError",
    "ValueNotSetError",
    "KINDS",
    "kind_from_spec",
    "load_file",
    "read_lines",
    "Registry",
    "format_report",
    "write_report",
    "ParameterSlot",
]
