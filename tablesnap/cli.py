"""
Command Line Interface
======================

Read a pipe-delimited table from a file or stdin and write a PNG image to a
file or stdout.

Usage:
    tablesnap -i table.md -o table.png --theme light
    cat table.md | tablesnap > table.png
    tablesnap --install-emoji
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from tablesnap import __version__
from tablesnap.config.logging import get_logger
from tablesnap.config.settings import get_settings
from tablesnap.core.rendering.fonts import FontSetupError
from tablesnap.core.rendering.png_generator import PNGGenerationError, PNGTableGenerator
from tablesnap.core.table.parser import TableParseError
from tablesnap.emoji_install import EmojiInstallError, install_emoji_pack
from tablesnap.models.schemas import RenderOptions, ThemeName

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="tablesnap", description="Render a markdown-style pipe table to PNG"
    )
    parser.add_argument("-i", "--input", help="Input file (default: stdin)")
    parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    parser.add_argument(
        "--theme",
        choices=[t.value for t in ThemeName],
        default=settings.default_theme.value,
        help="Color theme",
    )
    parser.add_argument("--font-size", type=float, default=settings.font_size, help="Font size")
    parser.add_argument("--padding", type=float, default=settings.padding, help="Cell padding")
    parser.add_argument("--font", default=settings.font_path, help="TrueType/OpenType font file")
    parser.add_argument(
        "--no-substitute", action="store_true", help="Keep pictographs as typed"
    )
    parser.add_argument(
        "--install-emoji", action="store_true", help="Download the emoji image pack and exit"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def read_input(path: Optional[str]) -> str:
    if path:
        return Path(path).read_text(encoding="utf-8-sig")
    return sys.stdin.buffer.read().decode("utf-8-sig")


def write_output(path: Optional[str], data: bytes) -> None:
    if path:
        Path(path).write_bytes(data)
        return
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.install_emoji:
        try:
            count = install_emoji_pack()
        except EmojiInstallError as e:
            print(f"Error installing emoji: {e}", file=sys.stderr)
            return 1
        settings = get_settings()
        if count:
            print(f"Installed {count} emoji to {settings.emoji_cache_dir}", file=sys.stderr)
        else:
            print(f"Emoji pack already installed at {settings.emoji_cache_dir}", file=sys.stderr)
        return 0

    try:
        text = read_input(args.input)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    try:
        options = RenderOptions(
            theme=args.theme,
            font_size=args.font_size,
            padding=args.padding,
            font_path=args.font,
            substitute_glyphs=not args.no_substitute,
        )
    except ValueError as e:
        print(f"Error in options: {e}", file=sys.stderr)
        return 1

    generator = PNGTableGenerator()
    try:
        result = generator.generate_png(text, options)
    except TableParseError as e:
        print(f"Error parsing table: {e}", file=sys.stderr)
        return 1
    except (FontSetupError, PNGGenerationError) as e:
        print(f"Error rendering: {e}", file=sys.stderr)
        return 1

    try:
        write_output(args.output, result.png_data)
    except OSError as e:
        print(f"Error saving PNG: {e}", file=sys.stderr)
        return 1

    logger.debug("Wrote PNG", output=args.output or "<stdout>", file_size=result.file_size)
    return 0


if __name__ == "__main__":
    sys.exit(main())
