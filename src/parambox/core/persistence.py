# どこで: `src/parambox/core/persistence.py`。
# 何を: パラメータファイルを読み、Registry へロードする。
# なぜ: ファイル I/O を Line Parser から切り離し、I/O エラーは解釈せずそのまま呼び出し側へ返すため。

from __future__ import annotations

import logging
from pathlib import Path

from .registry import Registry
from .runtime_config import runtime_config

_logger = logging.getLogger(__name__)


def read_lines(path: str | Path, *, encoding: str | None = None) -> list[str]:
    """path の内容を物理行のリストで返す。

    改行（\\n / \\r\\n / \\r）でのみ分割する。値に含まれる \\x0c や \\u2028 などは
    行区切りとして扱わない（str.splitlines() とは異なる）。
    OSError（FileNotFoundError / PermissionError など）はそのまま送出する。
    """

    if encoding is None:
        encoding = runtime_config().encoding
    # read_text は universal newlines なので改行は "\n" に正規化済み。
    lines = Path(path).read_text(encoding=encoding).split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def load_file(
    registry: Registry,
    path: str | Path,
    *,
    encoding: str | None = None,
    reject_duplicates: bool | None = None,
) -> None:
    """path のパラメータファイルを registry へロードする。

    Parameters
    ----------
    registry : Registry
        値を設定する先。
    path : str | Path
        `name value` 形式のテキストファイル。
    encoding : str | None
        None なら config の `loader.encoding`。
    reject_duplicates : bool | None
        None なら config の `loader.reject_duplicate_keys`。

    Raises
    ------
    OSError
        ファイルを読めない場合（再試行しない）。
    LoadError
        行の解釈/型変換に失敗した場合。source は path。
    """

    if reject_duplicates is None:
        reject_duplicates = runtime_config().reject_duplicate_keys
    lines = read_lines(path, encoding=encoding)
    registry.load(lines, source=str(path), reject_duplicates=bool(reject_duplicates))
    _logger.debug(
        "パラメータファイルをロードしました: path=%s lines=%d unset=%s",
        path,
        len(lines),
        registry.unset_names(),
    )


__all__ = ["read_lines", "load_file"]
