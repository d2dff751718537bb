"""
studylog — 学習ログから静的サイトを作る

使い方:
  studylog build                      # content/logs -> _site
  studylog build --today 2024-01-10   # 「今日」を固定してビルド
  studylog build --card               # 今週のサマリー画像も生成
  studylog validate                   # ログの厳密チェック
"""

import argparse
import logging
import sys
from pathlib import Path

from studylog import config
from studylog.build import build_site
from studylog.dates import is_valid_date, today
from studylog.validate import validate_logs

logger = logging.getLogger("studylog")


def setup_logging(verbose=False):
    """studylog ロガーに stderr ハンドラを1つだけ付ける"""
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if logger.hasHandlers():
        logger.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)


def date_arg(value: str) -> str:
    if not is_valid_date(value):
        raise argparse.ArgumentTypeError(f"not a valid YYYY-MM-DD date: {value}")
    return value


def cmd_build(args) -> int:
    today_str = args.today or today()
    try:
        result = build_site(Path(args.logs_dir), Path(args.out), today_str, card=args.card)
    except OSError as e:
        print(f"ビルドに失敗しました: {e}", file=sys.stderr)
        return 1
    print(f"Built {result.pages} page(s) into {result.site_dir}")
    return 0


def cmd_validate(args) -> int:
    logs_dir = Path(args.logs_dir)
    if not logs_dir.is_dir():
        print(f"Missing directory: {logs_dir}", file=sys.stderr)
        return 1

    report = validate_logs(logs_dir)
    if not report.ok:
        print("Validation failed:\n", file=sys.stderr)
        for issue in report.issues:
            print(f"- {issue}", file=sys.stderr)
        print(f"\n{len(report.issues)} error(s) in {report.files_checked} file(s)", file=sys.stderr)
        return 1

    print(f"Validation passed: {report.files_checked} log file(s)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="studylog",
        description="学習ログから週・月・日別の静的サイトを生成",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="デバッグログを表示")
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="サイトを生成")
    build.add_argument("--logs-dir", default=str(config.LOGS_DIR),
                       help=f"ログのディレクトリ（デフォルト: {config.LOGS_DIR}）")
    build.add_argument("--out", default=str(config.SITE_DIR),
                       help=f"出力先（デフォルト: {config.SITE_DIR}）")
    build.add_argument("--today", type=date_arg, metavar="YYYY-MM-DD",
                       help="今日の日付を固定する（デフォルト: Asia/Tokyo の今日）")
    build.add_argument("--card", action="store_true", help="今週のサマリー画像を生成")
    build.set_defaults(func=cmd_build)

    validate = sub.add_parser("validate", help="ログを検証")
    validate.add_argument("--logs-dir", default=str(config.LOGS_DIR),
                          help=f"ログのディレクトリ（デフォルト: {config.LOGS_DIR}）")
    validate.set_defaults(func=cmd_validate)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
