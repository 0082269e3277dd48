# どこで: `src/parambox/cli.py`。
# 何を: `parambox` コマンド（パラメータファイルのロード確認とレポート表示）を提供する。
# なぜ: 宣言とファイルをコマンドラインから与えて、型変換結果をその場で確認できるようにするため。

from __future__ import annotations

import argparse
import logging
import sys

from parambox.core.errors import ParamBoxError
from parambox.core.persistence import load_file
from parambox.core.registry import Registry
from parambox.core.report import format_report
from parambox.core.runtime_config import set_config_path


def _parse_declaration(text: str) -> tuple[str, str]:
    name, sep, kind = text.rpartition(":")
    if not sep or not name or not kind:
        raise argparse.ArgumentTypeError(f"NAME:KIND の形式で指定してください: got={text!r}")
    return name, kind


def _build_argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="parambox",
        description="宣言したパラメータへ `name value` 形式のファイルをロードします。",
    )
    parser.add_argument("--config", type=str, default=None, help="config.yaml のパス。")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug ログを表示。")

    sub = parser.add_subparsers(dest="command", required=True)

    def add_common(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "-d",
            "--declare",
            type=_parse_declaration,
            action="append",
            default=[],
            metavar="NAME:KIND",
            help="パラメータ宣言（例: a:int, b:str, c:f64）。複数指定可。",
        )
        p.add_argument("--encoding", type=str, default=None, help="入力ファイルの文字コード。")
        # サブコマンド後ろの --config も受け付ける。SUPPRESS で上位の値を上書きしない。
        p.add_argument(
            "--config", type=str, default=argparse.SUPPRESS, help="config.yaml のパス。"
        )

    load = sub.add_parser("load", help="ファイルをロードして値を表示する。")
    add_common(load)
    load.add_argument("file", help="パラメータファイル。")
    load.add_argument(
        "--allow-unset",
        action="store_true",
        help="値が設定されなかったパラメータがあってもエラーにしない。",
    )

    describe = sub.add_parser("describe", help="宣言内容のレポートを表示する。")
    add_common(describe)
    describe.add_argument("file", nargs="?", default=None, help="任意のパラメータファイル。")
    return parser


def _declare_all(registry: Registry, declarations: list[tuple[str, str]]) -> None:
    for name, kind in declarations:
        registry.declare(name, kind)


def _run_load(args: argparse.Namespace) -> int:
    registry = Registry()
    _declare_all(registry, args.declare)
    load_file(registry, args.file, encoding=args.encoding)

    unset = registry.unset_names()
    if unset and not args.allow_unset:
        print(f"値が設定されていないパラメータがあります: {', '.join(unset)}", file=sys.stderr)
        return 1

    for name in registry:
        if registry.has_value(name):
            print(f"{name} = {registry.get_value(name)!r}")
        else:
            print(f"{name} = <unset>")
    return 0


def _run_describe(args: argparse.Namespace) -> int:
    registry = Registry()
    _declare_all(registry, args.declare)
    if args.file is not None:
        load_file(registry, args.file, encoding=args.encoding)
    sys.stdout.write(format_report(registry))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_argparser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.config is not None:
        set_config_path(args.config)

    try:
        if args.command == "describe":
            return _run_describe(args)
        return _run_load(args)
    except (ParamBoxError, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
