# どこで: `src/parambox/core/line_parser.py`。
# 何を: `name value` 形式の行列を読み、Registry の各スロットへ値を設定する。
# なぜ: 行の分割/コメント判定と、型変換（Registry 側）を分離するため。

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from .errors import DuplicateKeyError, LoadError, MalformedLineError, ParamBoxError

if TYPE_CHECKING:
    from .registry import Registry

COMMENT_PREFIX = "#"


def split_line(line: str) -> tuple[str, str] | None:
    """1 行を (name, raw_value) に分割して返す。空行/コメント行なら None。

    raw_value は最初の空白連続以降すべて（前後空白除去）で、それ以上分割しない。

    Raises
    ------
    MalformedLineError
        値フィールドが無い場合。
    """

    text = line.strip()
    if not text or text.startswith(COMMENT_PREFIX):
        return None
    fields = text.split(None, 1)
    if len(fields) != 2:
        raise MalformedLineError(text)
    name, raw_value = fields
    return name, raw_value.strip()


def parse(
    lines: Iterable[str],
    registry: Registry,
    *,
    source: str | None = None,
    reject_duplicates: bool = False,
) -> None:
    """lines を先頭から読み、各行の値を registry へ設定する。

    最初のエラーで停止し、LoadError（1 始まりの行番号付き）を送出する。
    それまでに成功した行の値は registry に残る。

    Parameters
    ----------
    lines : Iterable[str]
        1 物理行 = 1 要素の行列（末尾改行の有無は問わない）。
    registry : Registry
        値を設定する先。
    source : str | None
        エラーメッセージに含める入力元（ファイルパス等）。
    reject_duplicates : bool
        True なら同一ロード内で同じ名前が 2 回現れた時点で DuplicateKeyError とする。
    """

    seen: dict[str, int] = {}
    for line_number, line in enumerate(lines, start=1):
        try:
            fields = split_line(line)
            if fields is None:
                continue
            name, raw_value = fields
            if reject_duplicates and name in seen:
                raise DuplicateKeyError(name, seen[name])
            seen.setdefault(name, line_number)
            registry.set_value(name, raw_value)
        except ParamBoxError as exc:
            raise LoadError(line_number, exc, source=source) from exc


__all__ = ["COMMENT_PREFIX", "split_line", "parse"]
