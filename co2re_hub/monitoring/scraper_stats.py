"""
Ingestion run monitoring.

Provides:
- A record of every fetch and persist attempt, labelled with the error
  taxonomy (source_unreachable, parse_failure, persistence_failure)
- Per-stage results with explicit successes and failures
- Run statistics and failure export for manual review
- Alert thresholds
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

import requests

from co2re_hub.core.constants import (
    ALERT_SUCCESS_RATE,
    ERROR_PARSE_FAILURE,
    ERROR_SOURCE_UNREACHABLE,
    FAILURE_THRESHOLD,
    MAX_FAILED_SOURCES,
)
from co2re_hub.core.errors import IngestionError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def classify_error(error: BaseException) -> str:
    """
    Map an exception onto the ingestion error taxonomy.

    Adapter errors carry their own label; bare requests errors count as
    unreachable sources and anything else as a parse failure.
    """
    if isinstance(error, IngestionError):
        return error.error_type
    if isinstance(error, requests.RequestException):
        return ERROR_SOURCE_UNREACHABLE
    return ERROR_PARSE_FAILURE


@dataclass
class StageFailure:
    """A source that could not be turned into a record."""
    source_id: str
    error: str
    error_type: str


@dataclass
class StageResult(Generic[T]):
    """
    Outcome of one pipeline stage (API pass, web pass, funder pass, ...).

    Attributes:
        items: Records produced by the stage
        failures: Sources that were skipped, with the reason
    """
    items: List[T] = field(default_factory=list)
    failures: List[StageFailure] = field(default_factory=list)

    def add_failure(self, source_id: str, error: BaseException) -> StageFailure:
        failure = StageFailure(source_id=source_id, error=str(error), error_type=classify_error(error))
        self.failures.append(failure)
        return failure

    def extend(self, other: "StageResult[T]") -> None:
        self.items.extend(other.items)
        self.failures.extend(other.failures)

    @property
    def counts(self) -> Tuple[int, int]:
        """(successes, failures)"""
        return len(self.items), len(self.failures)


@dataclass
class ScrapeAttempt:
    """
    Record of a single fetch or persist attempt.

    Attributes:
        source_id: Seed URL, funder name or record id
        url: URL involved, if any
        stage: Pipeline stage ("api", "web", "publications", "funders", "persist", ...)
        timestamp: When the attempt was made
        success: Whether it succeeded
        error: Error message if failed
        error_type: Taxonomy label if failed
        duration_ms: Time taken in milliseconds
    """
    source_id: str
    url: Optional[str]
    stage: str
    timestamp: datetime
    success: bool
    error: Optional[str] = None
    error_type: Optional[str] = None
    duration_ms: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "source_id": self.source_id,
            "url": self.url,
            "stage": self.stage,
            "timestamp": self.timestamp.isoformat(),
            "success": self.success,
            "error": self.error,
            "error_type": self.error_type,
            "duration_ms": self.duration_ms,
        }


@dataclass
class ScrapeStats:
    """
    Aggregate statistics for an ingestion run.

    Attributes:
        run_id: Unique identifier for this run
        start_time: When the run started
        end_time: When the run ended
        total_attempts: Fetch and persist attempts recorded
        successful: Successful attempts
        failed: Failed attempts
        records_created: Rows inserted by the persistence adapter
        records_updated: Rows updated in place
        fallbacks_used: Stages that degraded to static content
    """
    run_id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    total_attempts: int = 0
    successful: int = 0
    failed: int = 0
    records_created: int = 0
    records_updated: int = 0
    fallbacks_used: List[str] = field(default_factory=list)

    @property
    def success_rate(self) -> float:
        """Calculate success rate as percentage."""
        if self.total_attempts == 0:
            return 0.0
        return (self.successful / self.total_attempts) * 100

    @property
    def duration_seconds(self) -> Optional[float]:
        """Calculate run duration in seconds."""
        if self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "run_id": self.run_id,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "total_attempts": self.total_attempts,
            "successful": self.successful,
            "failed": self.failed,
            "records_created": self.records_created,
            "records_updated": self.records_updated,
            "fallbacks_used": list(self.fallbacks_used),
            "success_rate": round(self.success_rate, 2),
            "duration_seconds": self.duration_seconds,
        }


class ScraperMonitor:
    """
    Track ingestion health for one run.

    Usage:
        monitor = ScraperMonitor()

        monitor.log_attempt("https://co2re.org/research/", stage="web", success=True)
        monitor.log_failure("Counteract VC", error, stage="funders", url=source.url)

        stats = monitor.finalize()
        monitor.export_failures("logs/failures.json")
    """

    def __init__(self, run_id: Optional[str] = None):
        """
        Initialize the monitor.

        Args:
            run_id: Optional identifier for this run. Defaults to timestamp.
        """
        self.run_id = run_id or _utcnow().strftime("%Y%m%d_%H%M%S")
        self.attempts: List[ScrapeAttempt] = []
        self.failed_sources: Dict[str, int] = {}  # source_id -> failure_count
        self.stats = ScrapeStats(run_id=self.run_id, start_time=_utcnow())

        logger.info(f"ScraperMonitor initialized with run_id: {self.run_id}")

    def log_attempt(
        self,
        source_id: str,
        stage: str,
        success: bool,
        url: Optional[str] = None,
        error: Optional[str] = None,
        error_type: Optional[str] = None,
        duration_ms: Optional[int] = None,
        created: bool = False,
        updated: bool = False,
    ) -> None:
        """
        Log a fetch or persist attempt.

        Args:
            source_id: Seed URL, funder name or record id
            stage: Pipeline stage name
            success: Whether the attempt succeeded
            url: URL involved, if any
            error: Error message if failed
            error_type: Taxonomy label if failed
            duration_ms: Time taken in milliseconds
            created: Persist attempt inserted a new row
            updated: Persist attempt updated an existing row
        """
        attempt = ScrapeAttempt(
            source_id=source_id,
            url=url,
            stage=stage,
            timestamp=_utcnow(),
            success=success,
            error=error,
            error_type=error_type,
            duration_ms=duration_ms,
        )

        self.attempts.append(attempt)
        self.stats.total_attempts += 1

        if success:
            self.stats.successful += 1
            if created:
                self.stats.records_created += 1
            elif updated:
                self.stats.records_updated += 1

            if source_id in self.failed_sources:
                del self.failed_sources[source_id]
                logger.info(f"Source {source_id} recovered from failures")
            return

        self.stats.failed += 1

        failures = self.failed_sources.get(source_id, 0) + 1
        self.failed_sources[source_id] = failures
        if failures >= FAILURE_THRESHOLD:
            logger.warning(f"Source {source_id} has failed {failures} times - flagged for manual review")

        if len(self.failed_sources) > MAX_FAILED_SOURCES:
            # Keep the sources with the most failures
            sorted_failures = sorted(self.failed_sources.items(), key=lambda x: x[1], reverse=True)
            self.failed_sources = dict(sorted_failures[:MAX_FAILED_SOURCES])

    def log_failure(
        self,
        source_id: str,
        error: BaseException,
        stage: str,
        url: Optional[str] = None,
    ) -> str:
        """
        Log a failed attempt from a caught exception.

        Returns:
            The taxonomy label the error was recorded under
        """
        error_type = classify_error(error)
        self.log_attempt(
            source_id=source_id,
            stage=stage,
            success=False,
            url=url,
            error=str(error),
            error_type=error_type,
        )
        return error_type

    def record_fallback(self, stage: str) -> None:
        """Note that a stage degraded to static content."""
        self.stats.fallbacks_used.append(stage)
        logger.warning(f"Stage {stage} fell back to static content")

    def get_failed_sources(self, min_failures: int = FAILURE_THRESHOLD) -> Dict[str, int]:
        """
        Get sources that have failed repeatedly.

        Args:
            min_failures: Minimum failure count to include

        Returns:
            Dict mapping source_id to failure count
        """
        return {
            source_id: count
            for source_id, count in self.failed_sources.items()
            if count >= min_failures
        }

    def get_error_summary(self) -> Dict[str, int]:
        """
        Get summary of errors by taxonomy label.

        Returns:
            Dict mapping error_type to count
        """
        summary: Dict[str, int] = {}
        for attempt in self.attempts:
            if not attempt.success and attempt.error_type:
                summary[attempt.error_type] = summary.get(attempt.error_type, 0) + 1
        return summary

    def finalize(self) -> ScrapeStats:
        """
        Finalize the run and return statistics.

        Returns:
            Final ScrapeStats object
        """
        self.stats.end_time = _utcnow()

        logger.info(
            f"Ingestion run {self.run_id} complete: "
            f"{self.stats.successful}/{self.stats.total_attempts} successful "
            f"({self.stats.success_rate:.1f}%), "
            f"{self.stats.records_created} created, {self.stats.records_updated} updated"
        )

        return self.stats

    def get_stats(self) -> ScrapeStats:
        return self.stats

    def export_failures(self, output_path: str) -> None:
        """
        Export failed attempts to a JSON file for manual review.

        Args:
            output_path: Path to output file
        """
        path = Path(output_path)
        failures = [attempt.to_dict() for attempt in self.attempts if not attempt.success]

        export_data = {
            "run_id": self.run_id,
            "export_time": _utcnow().isoformat(),
            "summary": {
                "total_failures": len(failures),
                "persistent_failures": len(self.get_failed_sources()),
                "error_summary": self.get_error_summary(),
            },
            "persistent_failures": self.get_failed_sources(),
            "all_failures": failures,
        }

        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(export_data, f, indent=2)

        logger.info(f"Exported {len(failures)} failures to {output_path}")

    def export_stats(self, output_path: str) -> None:
        """
        Export run statistics to a JSON file.

        Args:
            output_path: Path to output file
        """
        path = Path(output_path)

        export_data = {
            "stats": self.stats.to_dict(),
            "error_summary": self.get_error_summary(),
            "persistent_failures_count": len(self.get_failed_sources()),
        }

        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(export_data, f, indent=2)

        logger.info(f"Exported stats to {output_path}")

    def should_alert(self) -> bool:
        """
        Check if the run warrants an alert.

        Returns True if the success rate is below 95% or more than 3
        sources have persistent failures.
        """
        if self.stats.total_attempts == 0:
            return False
        if self.stats.success_rate < ALERT_SUCCESS_RATE:
            return True
        return len(self.get_failed_sources()) > FAILURE_THRESHOLD

    def get_alert_message(self) -> Optional[str]:
        """
        Generate alert message if alerting is warranted.

        Returns:
            Alert message string or None
        """
        if not self.should_alert():
            return None

        messages = []

        if self.stats.success_rate < ALERT_SUCCESS_RATE:
            messages.append(
                f"Low success rate: {self.stats.success_rate:.1f}% "
                f"({self.stats.failed}/{self.stats.total_attempts} failed)"
            )

        persistent = self.get_failed_sources()
        if len(persistent) > FAILURE_THRESHOLD:
            messages.append(f"{len(persistent)} sources have persistent failures")

        if self.stats.fallbacks_used:
            messages.append(f"Fallback content used for: {', '.join(self.stats.fallbacks_used)}")

        error_summary = self.get_error_summary()
        if error_summary:
            top_error = max(error_summary.items(), key=lambda x: x[1])
            messages.append(f"Most common error: {top_error[0]} ({top_error[1]} occurrences)")

        return "\n".join(messages)
