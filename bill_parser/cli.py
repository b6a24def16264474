#!/usr/bin/env python3
"""
Bill Parser CLI - run the capture and edit stages from a terminal.

Usage:
    bill-parser upload ./bill.jpg --parse-url http://127.0.0.1:3000/api/parse-bill
    bill-parser --db handoff.db show
"""

import argparse
import asyncio
import mimetypes
import sys
from pathlib import Path

from .core.config import settings
from .core.errors import BillFlowError
from .core.logging import setup_logging
from .services.capture import CaptureStage
from .services.editor import EditStage
from .services.parse_client import ParseBillClient
from .services.storage.handoff import create_handoff_store
from .services.storage.handoff_store_base import HandoffStoreBase


def print_bill(stage: EditStage):
    """Print the edit stage the way the edit screen lists it"""
    snapshot = stage.snapshot()
    if snapshot["state"] == "empty":
        print(f"📄 {snapshot['hint']}")
        return

    print("📊 EXTRACTED ITEMS:")
    for index, item in enumerate(snapshot["items"]):
        name = item["name"] or "(unnamed)"
        print(f"   {index:>2}. {name:<30} {item['price']:>10}")
    print(f"   {'Total:':<34} {snapshot['total']:>10}")


def run_upload(store: HandoffStoreBase, image_path: Path, parse_url: str | None) -> int:
    if not image_path.exists():
        print(f"❌ File not found: {image_path}")
        return 1

    content_type, _ = mimetypes.guess_type(image_path.name)
    capture = CaptureStage(store, ParseBillClient(url=parse_url))

    try:
        capture.select_file(image_path.name, content_type, image_path.read_bytes())
        print(f"🔄 Uploading {image_path.name} to {capture.client.url} ...")
        asyncio.run(capture.upload())
    except BillFlowError as e:
        print(f"❌ Error: {e.message}")
        return 1

    edit = EditStage(store)
    edit.open()
    print_bill(edit)
    return 0


def run_show(store: HandoffStoreBase) -> int:
    edit = EditStage(store)
    edit.open()
    print_bill(edit)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bill-parser", description="Upload a bill image and review the parsed items")
    parser.add_argument(
        "--backend",
        default="sqlite",
        choices=["memory", "sqlite"],
        help="Handoff store backend (default: sqlite; memory keeps nothing between runs, so show finds no bill)",
    )
    parser.add_argument(
        "--db",
        default=settings.handoff_db_path,
        help=f"SQLite handoff database (default: {settings.handoff_db_path})",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    upload = sub.add_parser("upload", help="Parse a bill image and store the result")
    upload.add_argument("image", type=Path, help="Path to the bill image")
    upload.add_argument(
        "--parse-url",
        default=None,
        help=f"Parse service URL (default: {settings.parse_bill_url})",
    )

    sub.add_parser("show", help="Show the stored bill")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    store = create_handoff_store(args.backend, args.db)
    if args.command == "upload":
        return run_upload(store, args.image, args.parse_url)
    return run_show(store)


if __name__ == "__main__":
    sys.exit(main())
