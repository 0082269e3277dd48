# どこで: `src/parambox/__init__.py`。
# 何を: ルート `parambox` パッケージを定義する。
# なぜ: import 起点を `parambox` に統一するため。

from __future__ import annotations

from parambox.core import (
    Bound,
    ConditionViolationError,
    DuplicateKeyError,
    DuplicateParameterError,
    LoadError,
    MalformedLineError,
    ParamBoxError,
    Registry,
    TypeCoercionError,
    UnknownParameterError,
    ValueNotSetError,
    format_report,
    load_file,
)

__all__ = [
    "Bound",
    "ConditionViolationError",
    "DuplicateKeyError",
    "DuplicateParameterError",
    "LoadError",
    "MalformedLineError",
    "ParamBoxError",
    "Registry",
    "TypeCoercionError",
    "UnknownParameterError",
    "ValueNotSetError",
    "format_report",
    "load_file",
]
