#!/usr/bin/env python3
"""
CLI for the image extractor.

Commands:
- read SOURCE   run read_visual on a file path, URL or base64 string
- serve         run the tool API with uvicorn
"""
import argparse
import asyncio
import base64
import json
import logging
import sys
from typing import List, Optional

from .config.settings import settings
from .services.extraction_service import ExtractionService


def configure_logging(level: str = settings.log_level):
    """Log to stderr so stdout stays clean for results."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr
    )


async def read_cli(args: argparse.Namespace) -> int:
    """Run read_visual and print metadata. Returns the exit code."""
    service = ExtractionService(settings=settings)
    result = await service.read_visual(
        source=args.source,
        page=args.page,
        dpi=args.dpi,
        focus_xyxy=args.focus_xyxy,
        focal_point=args.focal_point,
        mime_type=args.mime_type
    )

    if result.is_error:
        print(result.text, file=sys.stderr)
        return 1

    print(json.dumps(result.metadata, indent=2))

    if args.output:
        image_part = result.content[1]
        with open(args.output, 'wb') as f:
            f.write(base64.b64decode(image_part['data']))
        print(f"✓ Image written to {args.output} ({image_part['mimeType']})", file=sys.stderr)

    return 0


def serve_cli(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run(
        "image_extractor.serving.tool_api:app",
        host=args.host,
        port=args.port,
        log_level=settings.log_level.lower()
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="image-extractor",
        description="Prepare images and PDF pages for LLM visual analysis"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    read_parser = subparsers.add_parser("read", help="Read a file, URL or base64 source")
    read_parser.add_argument("source", help="File path, http(s) URL, raw base64 or data URL")
    read_parser.add_argument("--page", type=int, default=1, help="PDF page (1-indexed)")
    read_parser.add_argument("--dpi", type=int, default=None, help="PDF rendering DPI")
    read_parser.add_argument(
        "--focus-xyxy", type=float, nargs=4, metavar=("X1", "Y1", "X2", "Y2"),
        help="Focus rectangle in pixels or ratios"
    )
    read_parser.add_argument(
        "--focal-point", type=float, nargs=4, metavar=("CX", "CY", "HW", "HH"),
        help="Focal point and half extents in pixels or ratios"
    )
    read_parser.add_argument("--mime-type", default=None, help="MIME hint for raw base64")
    read_parser.add_argument("--output", "-o", default=None, help="Write the image to this file")

    serve_parser = subparsers.add_parser("serve", help="Run the tool API")
    serve_parser.add_argument("--host", default=settings.api_host)
    serve_parser.add_argument("--port", type=int, default=settings.api_port)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    if args.command == "read":
        return asyncio.run(read_cli(args))
    return serve_cli(args)


if __name__ == "__main__":
    sys.exit(main())
