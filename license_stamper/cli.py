# license_stamper/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from license_stamper.config import get_settings
from license_stamper.errors import StampError
from license_stamper.services.pdf_stamp import stamp_pdf
from license_stamper.services.stamp_request import StampRequest
from license_stamper.stamping.options import FooterPosition


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="license-stamp",
        description="Stamp a PDF with a license footer and QR code.",
    )
    parser.add_argument("input", type=Path, help="PDF to stamp")
    parser.add_argument("-o", "--output", type=Path, required=True, help="Where to write the stamped PDF")
    parser.add_argument("--customer-name", required=True)
    parser.add_argument("--order-number", required=True)
    parser.add_argument("--quantity", required=True, help="Licensed number of copies")
    parser.add_argument("--organization", default=None)
    parser.add_argument("--license-id", default=None, help="Defaults to a new UUID")
    parser.add_argument("--date", default=None, help="YYYY-MM-DD, defaults to today (UTC)")
    parser.add_argument(
        "--position",
        choices=[p.value for p in FooterPosition],
        default=FooterPosition.BOTTOM.value,
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        req = StampRequest(
            customer_name=args.customer_name,
            order_number=args.order_number,
            licensed_quantity=args.quantity,
            organization=args.organization,
            license_id=args.license_id,
            date=args.date,
            footer_position=args.position,
        )
    except ValidationError as e:
        print(f"Invalid stamp options:\n{e}", file=sys.stderr)
        return 1

    opts = req.to_options()

    try:
        pdf_bytes = args.input.read_bytes()
        stamped = stamp_pdf(pdf_bytes, opts, get_settings())
        args.output.write_bytes(stamped)
    except (OSError, StampError) as e:
        print(f"ERROR: {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    print(f"OK: {args.input} -> {args.output} (license={opts.license_id}, {len(stamped)} bytes)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
