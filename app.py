# app.py
import argparse
import logging
import sys

from config import ClipConfig
from speedclip.clip import clip_file
from speedclip.document import STDIO
from speedclip.durations import parse_duration
from speedclip.errors import ClipError

LOG = logging.getLogger("speedclip")

_EPILOG = """\
examples:
  speedclip --start 33s --end 36.5s profile.json > clipped.json
  speedclip --start 5m --end 10m profile.json clipped.json
  speedclip --start=-10s --end 0 profile.json

Negative durations count back from the end of each profile and must be
given as --start=-10s. An --end of 0 keeps everything after --start.
"""


def _duration(text: str) -> int:
    try:
        return parse_duration(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="speedclip",
        description="Crop speedscope files by timestamp.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("input", help="speedscope JSON file, or - for stdin")
    p.add_argument("output", nargs="?", default=STDIO, help="output path (default: stdout)")
    p.add_argument("-s", "--start", type=_duration, required=True, help="start timestamp, e.g. 33s")
    p.add_argument("-e", "--end", type=_duration, required=True, help="end timestamp, e.g. 36.5s")
    p.add_argument("--config", help="INI file (default: speedclip.ini)")
    p.add_argument("--indent", type=int, help="pretty-print the output with this indent")
    p.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], type=str.upper)
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    cfg = ClipConfig.load(args.config)
    if args.log_level is not None:
        cfg.log_level = args.log_level
    if args.indent is not None:
        cfg.json_indent = args.indent if args.indent > 0 else None

    # stdout carries the document
    logging.basicConfig(
        level=cfg.log_level_value,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        clip_file(args.input, args.output, args.start, args.end, cfg)
    except (ClipError, OSError) as exc:
        LOG.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
