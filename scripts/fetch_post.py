#!/usr/bin/env python3
import argparse
import asyncio
import json
import sys
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

# Allow running without installing the package
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from lesswrong_client.comment_tree import build_threads, dangling_parents, parent_cycles  # noqa: E402
from lesswrong_client.config import DEFAULT_COMMENT_LIMIT  # noqa: E402
from lesswrong_client.errors import LessWrongError  # noqa: E402
from lesswrong_client.lesswrong_api import LessWrongApiClient  # noqa: E402


def non_negative_int(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {n}")
    return n


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Fetch a LessWrong post and its top comments as JSON.")
    p.add_argument("post_id", type=str, help="Post _id, e.g. 7ZqGiPHTpiDMwqMN2.")
    p.add_argument("--limit", type=non_negative_int, default=DEFAULT_COMMENT_LIMIT, help="Max comments to fetch (0=post only).")
    p.add_argument("--include-deleted", action="store_true", help="Keep deleted / body-less comments.")
    p.add_argument("--output", type=str, default="", help="Write JSON here instead of stdout.")
    p.add_argument("--quiet", action="store_true", help="Suppress progress lines on stderr.")
    return p.parse_args(argv)


def _json_default(obj):
    if isinstance(obj, datetime):
        return obj.isoformat()
    raise TypeError(f"not JSON serializable: {type(obj).__name__}")


def thread_outline(thread) -> dict:
    return {"id": thread.comment.id, "replies": [thread_outline(r) for r in thread.replies]}


def log(msg: str, lvl: str = "info"):
    print(f"[{lvl}] {msg}", file=sys.stderr)


async def run(args) -> dict:
    log_callback = None if args.quiet else log
    async with LessWrongApiClient(log_callback=log_callback) as api:
        post = await api.get_post(args.post_id)
        comments = await api.get_comments(args.post_id, args.limit, include_deleted=args.include_deleted)

    threads = build_threads(comments)
    orphans = dangling_parents(comments)
    if orphans and log_callback:
        log_callback(f"{len(orphans)} comments reference parents outside the fetched set", "warning")
    cycles = parent_cycles(comments)
    if cycles and log_callback:
        log_callback(f"{len(cycles)} comments sit on a parent cycle", "warning")
    if log_callback:
        log_callback(f"threads={len(threads)} comments={len(comments)}")

    return {
        "post": asdict(post),
        "comments": [asdict(c) for c in comments],
        "threads": [thread_outline(t) for t in threads],
    }


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        result = asyncio.run(run(args))
    except LessWrongError as e:
        log(str(e), "error")
        return 1

    text = json.dumps(result, ensure_ascii=False, indent=2, default=_json_default)
    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text + "\n", encoding="utf-8")
        if not args.quiet:
            log(f"wrote {out}")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
