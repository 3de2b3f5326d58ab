import argparse
import asyncio
import json
import mimetypes
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from legal_lens.analysis.exceptions import AnalysisError
from legal_lens.config.settings import Settings
from legal_lens.logging.logger import Log
from legal_lens.service.exceptions import ServiceError
from legal_lens.service.legal_document_service import LegalDocumentService, build_service
from legal_lens.service.models import ProcessedDocument
from legal_lens.store.connection import close_pool
from legal_lens.store.exceptions import DocumentStoreError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="legal-lens",
        description="Analyze legal documents and ask questions about them.",
    )
    parser.add_argument(
        "--mime-type",
        help="MIME type of the input files (guessed from the file name by default)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    analyze = commands.add_parser("analyze", help="process documents and print their summaries")
    analyze.add_argument("files", nargs="+", type=Path)

    ask = commands.add_parser("ask", help="process a document and answer a question about it")
    ask.add_argument("file", type=Path)
    ask.add_argument("question")

    details = commands.add_parser("details", help="print a clause-by-clause risk breakdown")
    details.add_argument("file", type=Path)
    return parser


def guess_mime_type(path: Path, override: str | None = None) -> str:
    if override:
        return override
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type or "application/octet-stream"


async def run_command(service: LegalDocumentService, args: argparse.Namespace) -> list[Any]:
    """Execute one CLI command and return JSON-ready results."""
    if args.command == "analyze":
        results: list[Any] = []
        for path in args.files:
            document = await _process(service, path, args.mime_type)
            summary = service.get_document_summary(document.id)
            results.append(asdict(summary) if summary is not None else {"id": document.id})
        return results

    document = await _process(service, args.file, args.mime_type)
    if args.command == "ask":
        answer = await service.handle_chat_query(document.id, args.question)
        return [asdict(answer)]
    details = await service.analyze_clauses_and_risks(document.id)
    return [asdict(details)]


async def _process(
    service: LegalDocumentService,
    path: Path,
    mime_type: str | None,
) -> ProcessedDocument:
    return await service.process_legal_document(
        path.read_bytes(),
        path.name,
        guess_mime_type(path, mime_type),
    )


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> build the service -> run one command."""
    args = build_parser().parse_args(argv)
    try:
        settings = Settings()
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1
    Log.configure(settings.log_level)

    try:
        service = build_service(settings)
        results = asyncio.run(run_command(service, args))
    except (ServiceError, AnalysisError, DocumentStoreError, ValueError, OSError) as exc:
        Log.error("Command failed", command=args.command, error=type(exc).__name__)
        print(str(exc), file=sys.stderr)
        return 1
    finally:
        close_pool()

    for result in results:
        print(json.dumps(result, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
