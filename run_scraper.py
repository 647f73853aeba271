#!/usr/bin/env python3
"""
CO2RE Innovation Hub ingestion CLI.

Usage:
    python run_scraper.py documents
    python run_scraper.py funding
    python run_scraper.py matches --stage Seed --focus "Direct Air Capture" --type grant
    python run_scraper.py stats

Every command prints a JSON result; ingestion commands print
{"success", "count", "message"} and exit non-zero on failure.
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from pymongo import MongoClient

from co2re_hub.core.config import Settings
from co2re_hub.core.errors import PersistenceError
from co2re_hub.core.models import FunderProfile, IngestionResult
from co2re_hub.ingest.document_scraper import CO2REDocumentScraper
from co2re_hub.ingest.funding_scraper import CDRFunderScraper, CDRFundingScraper
from co2re_hub.ingest.web_client import WebClient
from co2re_hub.monitoring.scraper_stats import ScraperMonitor
from co2re_hub.services.document_service import DocumentService
from co2re_hub.services.funding_service import FundingService
from co2re_hub.storage.document_repository import DocumentRepository
from co2re_hub.storage.funding_repository import FundingRepository
from co2re_hub.storage.record_store import MongoRecordStore

logger = logging.getLogger(__name__)


def setup_logging(settings: Settings) -> None:
    """Log to stderr and to a timestamped file under the log directory."""
    Path(settings.log_dir).mkdir(parents=True, exist_ok=True)
    log_file = Path(settings.log_dir) / f'scraper_{datetime.now().strftime("%Y%m%d_%H%M%S")}.log'

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_file),
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CO2RE Innovation Hub ingestion")
    parser.add_argument("--env-file", help="Optional .env file to load")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("documents", help="Update the document library from CO2RE")
    sub.add_parser("funding", help="Scrape and store funding opportunities")

    matches = sub.add_parser("matches", help="Rank funding opportunities against a profile")
    matches.add_argument("--stage", help="Company stage, e.g. Seed")
    matches.add_argument("--focus", action="append", default=[], help="Focus area (repeatable)")
    matches.add_argument("--type", action="append", default=[], dest="types", help="Preferred funding type (repeatable)")
    matches.add_argument("--limit", type=int, default=10, help="Number of matches to return")

    sub.add_parser("stats", help="Print document and funding statistics")
    return parser


def report_monitor(monitor: ScraperMonitor, log_dir: str) -> None:
    """Export run stats, and failures when there were any; warn when alerting is needed."""
    stats = monitor.finalize()

    if stats.failed > 0:
        failures_path = f"{log_dir}/failed_sources_{monitor.run_id}.json"
        monitor.export_failures(failures_path)
        logger.warning(f"Exported {stats.failed} failures to {failures_path}")

    monitor.export_stats(f"{log_dir}/scraper_stats_{monitor.run_id}.json")

    if monitor.should_alert():
        logger.warning(f"Scraper alert triggered: {monitor.get_alert_message()}")


def build_services(settings: Settings, client: WebClient, monitor: ScraperMonitor, mongo_client: MongoClient):
    """Wire scrapers, repositories and services around one shared monitor."""
    documents = DocumentService(
        CO2REDocumentScraper(client, monitor=monitor, base_url=settings.base_url),
        DocumentRepository(
            MongoRecordStore.from_settings(settings, settings.documents_collection, client=mongo_client)
        ),
        monitor=monitor,
    )
    funding = FundingService(
        CDRFundingScraper(client, monitor=monitor),
        CDRFunderScraper(client, monitor=monitor),
        FundingRepository(
            MongoRecordStore.from_settings(settings, settings.funding_collection, client=mongo_client)
        ),
        monitor=monitor,
    )
    return documents, funding


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    settings = Settings.from_env(args.env_file)
    setup_logging(settings)

    client = WebClient(timeout=settings.request_timeout)
    monitor = ScraperMonitor()
    mongo_client = MongoClient(settings.mongo_uri)

    try:
        documents, funding = build_services(settings, client, monitor, mongo_client)
    except PersistenceError as e:
        logger.error(f"Store unavailable: {e}")
        mongo_client.close()
        print(json.dumps(IngestionResult(False, 0, f"Store unavailable: {e}").to_dict(), indent=2))
        return 1

    try:
        if args.command == "documents":
            result = documents.update_documents()
        elif args.command == "funding":
            result = funding.scrape_funding_data()
        elif args.command == "matches":
            profile = FunderProfile(stage=args.stage, focus_areas=args.focus, preferred_funding_types=args.types)
            top = funding.get_top_matches(profile, limit=args.limit)
            print(json.dumps(
                [{"id": o.id, "title": o.title, "matchScore": o.match_score} for o in top],
                indent=2,
            ))
            return 0
        else:
            print(json.dumps(
                {"documents": documents.get_document_stats(), "funding": funding.get_funding_stats()},
                indent=2,
            ))
            return 0
    finally:
        mongo_client.close()

    report_monitor(monitor, settings.log_dir)
    print(json.dumps(result.to_dict(), indent=2))
    logger.info(f"{args.command} finished: {result.message}")
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
