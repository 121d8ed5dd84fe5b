"""Command-line entry point for support document ingestion.

Usage:
    python run.py [--local] ingest [FILE] [--force] [--docs-dir DIR]
    python run.py preview FILE
    python run.py [--local] sources
    python run.py [--local] delete SOURCE
"""

import argparse
import logging
import sys
from pathlib import Path

from support_kb.config import AppConfig, load_config
from support_kb.errors import SupportKBError
from support_kb.ingestion.chunker import DocumentChunker
from support_kb.ingestion.embedder import EdgeFunctionEmbedder
from support_kb.ingestion.parser import DocumentReader
from support_kb.ingestion.pipeline import IngestionPipeline
from support_kb.preview import PreviewSession
from support_kb.storage.base import ChunkStore
from support_kb.storage.sqlite_store import SQLiteChunkStore

logger = logging.getLogger("support_kb")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Support knowledge-base ingestion")
    parser.add_argument("--config", default="config.yaml", help="Path to config.yaml")
    parser.add_argument(
        "--local",
        action="store_true",
        help="Use the SQLite store at storage.sqlite_path instead of Supabase",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    ingest = sub.add_parser("ingest", help="Chunk, embed and store documents")
    ingest.add_argument("file", nargs="?", help="One configured document name")
    ingest.add_argument("--force", action="store_true", help="Re-ingest existing sources")
    ingest.add_argument("--docs-dir", default=None, help="Directory holding the documents")

    preview = sub.add_parser("preview", help="Print the chunks a file would produce")
    preview.add_argument("file")

    sub.add_parser("sources", help="List ingested sources")

    delete = sub.add_parser("delete", help="Delete every chunk of a source")
    delete.add_argument("source")
    return parser


def build_store(config: AppConfig, local: bool) -> ChunkStore:
    if local:
        return SQLiteChunkStore(config.storage.sqlite_path)
    from support_kb.storage.supabase_store import SupabaseChunkStore

    return SupabaseChunkStore(config.require_supabase(anon_key=False))


def build_pipeline(config: AppConfig, local: bool) -> IngestionPipeline:
    return IngestionPipeline(
        chunker=DocumentChunker(config.chunking),
        embedder=EdgeFunctionEmbedder(config.require_supabase(service_role_key=False)),
        store=build_store(config, local),
    )


def cmd_ingest(args: argparse.Namespace, config: AppConfig) -> int:
    documents = config.ingestion.documents
    if args.file and args.file not in documents:
        logger.error('Unknown document: "%s". Available: %s', args.file, ", ".join(documents))
        return 1

    targets = [args.file] if args.file else documents
    docs_dir = args.docs_dir or config.ingestion.docs_dir
    pipeline = build_pipeline(config, args.local)
    reports = pipeline.ingest_directory(docs_dir, targets, force=args.force)

    ingested = [r for r in reports if r.status == "ingested"]
    logger.info(
        "Finished: %d ingested, %d skipped, %d missing",
        len(ingested),
        sum(r.status == "skipped" for r in reports),
        sum(r.status == "missing" for r in reports),
    )
    return 0


def cmd_preview(args: argparse.Namespace, config: AppConfig) -> int:
    document = DocumentReader().read(Path(args.file))
    session = PreviewSession.from_text(document.source, document.content, config.chunking)
    for chunk in session.chunks:
        print(f"--- [{chunk.index}] {chunk.title} ({len(chunk.content)} chars)")
        print(chunk.content)
        print()
    return 0


def cmd_sources(args: argparse.Namespace, config: AppConfig) -> int:
    for source in build_store(config, args.local).list_sources():
        print(source)
    return 0


def cmd_delete(args: argparse.Namespace, config: AppConfig) -> int:
    deleted = build_store(config, args.local).delete_by_source(args.source)
    logger.info('Deleted %d chunks for "%s"', deleted, args.source)
    return 0


COMMANDS = {
    "ingest": cmd_ingest,
    "preview": cmd_preview,
    "sources": cmd_sources,
    "delete": cmd_delete,
}


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, load configuration and run one command."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = load_config(args.config)

    try:
        return COMMANDS[args.command](args, config)
    except (SupportKBError, OSError, ValueError) as e:
        logger.error("Ingestion failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
