# どこで: `src/parambox/core/errors.py`。
# 何を: parambox の例外階層を定義する。
# なぜ: 宣言衝突/未宣言/型変換失敗/行番号付きロード失敗を呼び出し側で区別できるようにするため。

from __future__ import annotations


class ParamBoxError(Exception):
    """parambox が送出する例外の基底クラス。"""


class DuplicateParameterError(ParamBoxError):
    """宣言済みの名前を再宣言した。"""

    def __init__(self, name: str) -> None:
        super().__init__(f"`{name}` は既に宣言されています")
        self.name = name


class UnknownParameterError(ParamBoxError):
    """未宣言の名前を参照した。"""

    def __init__(self, name: str) -> None:
        super().__init__(f"`{name}` は宣言されていません")
        self.name = name


class TypeCoercionError(ParamBoxError):
    """テキストを宣言された型へ変換できなかった。"""

    def __init__(self, text: str, kind: str, *, name: str | None = None) -> None:
        target = "" if name is None else f" (`{name}`)"
        super().__init__(f"{text!r} を {kind} に変換できません{target}")
        self.text = text
        self.kind = kind
        self.name = name


class ValueNotSetError(ParamBoxError):
    """値が未設定のスロットを読んだ。"""

    def __init__(self, name: str) -> None:
        super().__init__(f"`{name}` には値がありません")
        self.name = name


class ConditionViolationError(ParamBoxError):
    """値がレンジ/リスト条件を満たさない。"""

    def __init__(self, name: str, value: object, condition: str) -> None:
        super().__init__(
            f"`{name}` = {value} は条件 `{name}` {condition} を満たしません"
        )
        self.name = name
        self.value = value
        self.condition = condition


class MalformedLineError(ParamBoxError):
    """コメントでも空行でもない行に値フィールドが無い。"""

    def __init__(self, line: str) -> None:
        super().__init__(f"各行は '<name> <value>' である必要があります: got={line!r}")
        self.line = line


class DuplicateKeyError(ParamBoxError):
    """1 回のロード内で同じ名前が複数回現れた。"""

    def __init__(self, name: str, first_line: int) -> None:
        super().__init__(f"`{name}` が重複しています（初出: {first_line} 行目）")
        self.name = name
        self.first_line = first_line


class LoadError(ParamBoxError):
    """ロード中のエラーを 1 始まりの行番号付きで包む。"""

    def __init__(
        self,
        line_number: int,
        cause: ParamBoxError,
        *,
        source: str | None = None,
    ) -> None:
        where = f"{line_number} 行目" if source is None else f"'{source}' の {line_number} 行目"
        super().__init__(f"{where}: {cause}")
        self.line_number = line_number
        self.cause = cause
        self.source = source


__all__ = [
    "ParamBoxError",
    "DuplicateParameterError",
    "UnknownParameterError",
    "TypeCoercionError",
    "ValueNotSetError",
    "ConditionViolationError",
    "MalformedLineError",
    "DuplicateKeyError",
    "LoadError",
]
