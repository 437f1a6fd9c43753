"""Command line front end for the BookScribe pipeline.

Subcommands:
* ``extract`` – embedded text with OCR fallback, written to ``<stem>.txt``.
* ``ocr`` – OCR only, for scanned documents.
* ``assemble`` – copy selected pages into ``<stem>.pdf``.
* ``serve`` – run the HTTP API with uvicorn.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from bookscribe.config import ToolConfig, load_config
from bookscribe.errors import BookscribeError
from bookscribe.export import export_pdf
from bookscribe.logging_setup import setup_logging
from bookscribe.pdf import assemble_pages, perform_ocr, read_source
from bookscribe.pdf.ocr import configure_tesseract
from bookscribe.selection import parse_page_spec
from bookscribe.session import EditorSession

logger = logging.getLogger(__name__)


def _session_for(path: Path, cfg: ToolConfig, pages: str | None) -> EditorSession:
    source = read_source(path)
    session = EditorSession(config=cfg)
    session.load(source.data, filename=source.filename)
    if pages:
        session.select_pages(parse_page_spec(pages))
    else:
        session.select_range(1, source.page_count)
    return session


def _cmd_extract(args: argparse.Namespace, cfg: ToolConfig) -> int:
    session = _session_for(Path(args.input), cfg, args.pages)
    extracted = session.extract()
    stem = args.name or Path(args.input).stem
    dest = session.save_text(stem).write_to(args.out_dir)
    print(f"Saved: {dest} (ocr={'yes' if extracted.used_ocr else 'no'})")
    return 0


def _cmd_ocr(args: argparse.Namespace, cfg: ToolConfig) -> int:
    source = read_source(args.input)
    configure_tesseract(cfg.tesseract_cmd)
    pages = parse_page_spec(args.pages) if args.pages else list(range(1, source.page_count + 1))
    text = perform_ocr(source, pages, scale=cfg.ocr_scale, lang=args.lang or cfg.ocr_lang)
    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding="utf-8")
        print(f"Saved: {out}")
    else:
        sys.stdout.write(text)
    return 0


def _cmd_assemble(args: argparse.Namespace, cfg: ToolConfig) -> int:
    # Straight to the assembler so out-of-range pages are reported, not filtered.
    source = read_source(args.input)
    assembled = assemble_pages(source, parse_page_spec(args.pages))
    dest = export_pdf(assembled.data, args.name).write_to(args.out_dir)
    if assembled.skipped:
        print(f"Skipped out-of-range pages: {', '.join(map(str, assembled.skipped))}", file=sys.stderr)
    print(f"Saved: {dest} ({assembled.page_count} pages)")
    return 0


def _cmd_serve(args: argparse.Namespace, cfg: ToolConfig) -> int:
    import uvicorn

    uvicorn.run("bookscribe.api.app:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bookscribe", description="Select PDF pages, extract text, build new PDFs.")
    parser.add_argument("--config", help="YAML config file (defaults to $BOOKSCRIBE_CONFIG)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_extract = sub.add_parser("extract", help="Extract text (OCR fallback when too short)")
    p_extract.add_argument("input", help="Path to input PDF")
    p_extract.add_argument("--pages", help='Pages used for OCR fallback, e.g. "1-3,5" (default: all)')
    p_extract.add_argument("--out-dir", default=".", help="Directory for the .txt file")
    p_extract.add_argument("--name", help="Output filename stem (default: input stem)")
    p_extract.set_defaults(func=_cmd_extract)

    p_ocr = sub.add_parser("ocr", help="OCR pages regardless of embedded text")
    p_ocr.add_argument("input", help="Path to input PDF")
    p_ocr.add_argument("output", nargs="?", help="Output .txt path (default: stdout)")
    p_ocr.add_argument("--pages", help='Pages to OCR, e.g. "3,7,12" (default: all)')
    p_ocr.add_argument("--lang", help="Tesseract language (default from config)")
    p_ocr.set_defaults(func=_cmd_ocr)

    p_asm = sub.add_parser("assemble", help="Create a new PDF from selected pages")
    p_asm.add_argument("input", help="Path to input PDF")
    p_asm.add_argument("--pages", required=True, help='Pages in output order, e.g. "2,5,9-10"')
    p_asm.add_argument("--name", required=True, help="Output filename stem")
    p_asm.add_argument("--out-dir", default=".", help="Directory for the .pdf file")
    p_asm.set_defaults(func=_cmd_assemble)

    p_serve = sub.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8000)
    p_serve.add_argument("--reload", action="store_true")
    p_serve.set_defaults(func=_cmd_serve)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Returns:
        Process exit code: ``0`` on success, ``2`` for missing input files,
        ``3`` for invalid configuration, ``4`` for pipeline errors.
    """
    args = build_parser().parse_args(argv)
    try:
        cfg = load_config(args.config)
    except (OSError, ValueError) as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return 3
    setup_logging(cfg.log_dir)
    try:
        return int(args.func(args, cfg))
    except FileNotFoundError as exc:
        print(f"Error: file not found: {exc}", file=sys.stderr)
        return 2
    except BookscribeError as exc:
        logger.info("cli_failed command=%s kind=%s detail=%s", args.command, exc.kind, exc)
        print(f"Error ({exc.kind}): {exc}", file=sys.stderr)
        return 4


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
