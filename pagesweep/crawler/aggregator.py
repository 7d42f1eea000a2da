"""
Result Aggregator - partitions outcomes and builds the run summary
"""

from typing import List, Optional, Sequence

from ..extraction.html_utils import utc_timestamp
from .result import CrawlFailure, CrawlOutcome, CrawlReport, CrawlSuccess, CrawlSummary


def format_duration(seconds: float) -> str:
    """Render a duration like '45s' or '2m 30s'"""
    total_seconds = int(max(seconds, 0))
    minutes, secs = divmod(total_seconds, 60)
    if minutes == 0:
        return f"{secs}s"
    return f"{minutes}m {secs}s"


def format_success_rate(successes: int, attempted: int) -> str:
    if attempted == 0:
        return "0%"
    return f"{successes / attempted * 100:.1f}%"


def partition_outcomes(outcomes: Sequence[CrawlOutcome]):
    successes: List[CrawlSuccess] = []
    failures: List[CrawlFailure] = []
    for outcome in outcomes:
        if isinstance(outcome, CrawlSuccess):
            successes.append(outcome)
        elif isinstance(outcome, CrawlFailure):
            failures.append(outcome)
        else:
            raise TypeError(f"Unexpected crawl outcome: {outcome!r}")
    return successes, failures


def aggregate(
    outcomes: Sequence[CrawlOutcome],
    elapsed_seconds: float,
    total_urls_raw: Optional[int] = None,
    total_urls_after_dedup: Optional[int] = None,
    total_urls_after_filter: Optional[int] = None,
    source: str = ""
) -> CrawlReport:
    """
    Split outcomes into successes and failures and summarise the run

    Stage counts default to the number of outcomes when the caller does not
    track them. Elapsed time is measured by the caller.
    """
    successes, failures = partition_outcomes(outcomes)
    attempted = len(outcomes)

    summary = CrawlSummary(
        source=source,
        total_urls_raw=attempted if total_urls_raw is None else total_urls_raw,
        total_urls_after_dedup=attempted if total_urls_after_dedup is None else total_urls_after_dedup,
        total_urls_after_filter=attempted if total_urls_after_filter is None else total_urls_after_filter,
        total_crawled=attempted,
        total_success=len(successes),
        total_errors=len(failures),
        success_rate=format_success_rate(len(successes), attempted),
        elapsed_time=format_duration(elapsed_seconds),
        elapsed_seconds=round(elapsed_seconds, 3),
        crawled_at=utc_timestamp(),
    )

    return CrawlReport(
        outcomes=list(outcomes),
        successes=successes,
        failures=failures,
        summary=summary,
    )
