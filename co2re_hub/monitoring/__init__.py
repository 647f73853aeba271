"""
Monitoring module for the CO2RE ingestion pipeline.

Provides attempt tracking, per-stage results, error classification and
run statistics.
"""

from co2re_hub.monitoring.scraper_stats import (
    ScrapeAttempt,
    ScraperMonitor,
    StageFailure,
    StageResult,
    classify_error,
)

__all__ = ["ScraperMonitor", "ScrapeAttempt", "StageFailure", "StageResult", "classify_error"]
