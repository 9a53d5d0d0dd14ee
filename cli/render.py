#!/usr/bin/env python3
"""
Render Strips

Render spacers, text or images into strip JSON, or join strip JSON files.
Output goes to stdout unless --output is given; --preview also writes a PNG.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from strip_renderer.color import parse_color
from strip_renderer.config import load_config
from strip_renderer.errors import RenderError
from strip_renderer.logging_setup import setup_logging
from strip_renderer.preview import strip_to_image, to_png_bytes
from strip_renderer.render import join, render_image, render_space, render_text
from strip_renderer.strip import Strip

logger = logging.getLogger("strip_renderer.cli")


def build_strip(args: argparse.Namespace) -> Strip:
    """Run the render operation selected on the command line."""
    if args.command == "space":
        return render_space(args.width, parse_color(args.bg_color))

    if args.command == "text":
        return render_text(
            args.text,
            args.font_size,
            parse_color(args.fg_color),
            parse_color(args.bg_color),
        )

    if args.command == "image":
        return render_image(args.image.read_bytes())

    strips = []
    for path in args.strips:
        with open(path, "r", encoding="utf-8") as f:
            strips.append(Strip.from_dict(json.load(f)))
    strict = load_config(args.config).strict_join if args.strict is None else args.strict
    return join(strips, strict=strict)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render strips for 8-row LED displays")
    parser.add_argument("--output", "-o", type=Path, help="Write strip JSON here instead of stdout")
    parser.add_argument("--preview", type=Path, help="Also write a PNG preview")
    parser.add_argument("--scale", type=int, default=8, help="Preview pixel size")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    space = sub.add_parser("space", help="Solid background spacer")
    space.add_argument("width", type=int)
    space.add_argument("--bg-color", default="#000000")

    text = sub.add_parser("text", help="Text in the 6x8 or 8x8 font")
    text.add_argument("text")
    text.add_argument("--font-size", type=int, default=8, help="Below 8 selects the small font")
    text.add_argument("--fg-color", default="#ff9900")
    text.add_argument("--bg-color", default="#000000")

    image = sub.add_parser("image", help="Image exactly 8 pixels high")
    image.add_argument("image", type=Path)

    joiner = sub.add_parser("join", help="Join strip JSON files left to right")
    joiner.add_argument("strips", nargs="*", type=Path)
    joiner.add_argument("--config", type=Path, default=None, help="Path to renderer.json")
    joiner.add_argument("--strict", dest="strict", action="store_true", default=None,
                        help="Reject strips with differing row counts")
    joiner.add_argument("--permissive", dest="strict", action="store_false", default=None,
                        help="Append strips even if row counts differ")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        strip = build_strip(args)
        if args.preview:
            args.preview.write_bytes(to_png_bytes(strip_to_image(strip, args.scale)))
            logger.info(f"Preview saved: {args.preview}")
    except RenderError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    except (OSError, json.JSONDecodeError) as e:
        print(f"❌ Failed: {e}", file=sys.stderr)
        return 1

    payload = json.dumps(strip.to_dict())
    if args.output:
        args.output.write_text(payload + "\n", encoding="utf-8")
        print(f"✓ {strip.columns}x{strip.rows} strip written to {args.output}", file=sys.stderr)
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
