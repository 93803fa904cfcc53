"""CLI harness: analyze a local file (NDJSON events on stdout), list stored contracts, serve the API."""
from __future__ import annotations

import argparse
import asyncio
import base64
import json
import logging
import sys
from pathlib import Path

from contractai.analysis.errors import InvalidInputError
from contractai.analysis.factory import create_contract_analyzer
from contractai.db.repositories.contract_repo import ContractRepo
from contractai.db.session import init_db, session_scope
from contractai.extraction import DocumentSubmission, ExtractionError, prepare_document
from contractai.streaming.ndjson import encode_event


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _submission_for(file_path: Path, name: str | None) -> DocumentSubmission:
    data = file_path.read_bytes()
    is_pdf = file_path.suffix.lower() == ".pdf"
    return DocumentSubmission(
        type="pdf" if is_pdf else "text",
        content=base64.b64encode(data).decode("ascii"),
        encoding="base64",
        name=name or file_path.name,
    )


def _cmd_analyze(args: argparse.Namespace) -> int:
    file_path = Path(args.file).resolve()
    if not file_path.exists():
        print(f"Error: file not found: {file_path}", file=sys.stderr)
        return 1
    if not args.no_persist:
        init_db()
    analyzer = create_contract_analyzer(persist=not args.no_persist)
    try:
        document = prepare_document(_submission_for(file_path, args.name))
        analyzer.validate(document)
    except (ExtractionError, InvalidInputError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    async def run() -> bool:
        ok = False
        async for event in analyzer.stream(document, user_id=args.user):
            sys.stdout.buffer.write(encode_event(event))
            sys.stdout.flush()
            ok = event.type == "complete"
        return ok

    return 0 if asyncio.run(run()) else 1


def _cmd_list(args: argparse.Namespace) -> int:
    init_db()
    with session_scope() as session:
        rows = ContractRepo().list_by_user(session, args.user)
    for row in rows:
        print(json.dumps(row.to_api(), ensure_ascii=False))
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    from contractai.api import create_app

    app = create_app()
    app.run(host=args.host, port=args.port, threaded=True)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Contract analysis CLI")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_analyze = sub.add_parser("analyze", help="Analyze a PDF or text file, streaming progress as NDJSON")
    p_analyze.add_argument("file", help="Path to a PDF or UTF-8 text file")
    p_analyze.add_argument("--name", help="Contract name (default: file name)")
    p_analyze.add_argument("--user", "-u", help="Owner user id for the stored contract")
    p_analyze.add_argument("--no-persist", action="store_true", help="Do not store the result")
    p_analyze.set_defaults(func=_cmd_analyze)

    p_list = sub.add_parser("list", help="List stored contracts of a user, newest first")
    p_list.add_argument("--user", "-u", required=True, help="Owner user id")
    p_list.set_defaults(func=_cmd_list)

    p_serve = sub.add_parser("serve", help="Run the HTTP API (development server)")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", "-p", type=int, default=5000)
    p_serve.set_defaults(func=_cmd_serve)

    args = parser.parse_args()
    _setup_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
