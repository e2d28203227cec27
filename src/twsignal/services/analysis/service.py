"""Analysis orchestration for single stocks, sectors and universe scans."""

import asyncio
import time
from typing import Awaitable, Callable, List, Optional, Sequence

from ...config.logging import get_logger, log_performance
from ...core.engine import AnalysisConfig, analyze_series
from ...core.exceptions import ComputationError, TwSignalError
from ...core.models import AnalysisRecord
from ..market_data import MarketDataService, StockDirectory
from .models import BatchOutcome, ProgressCallback, SectorInfo
from .sectors import get_sector, list_sectors

logger = get_logger(__name__)


class AnalysisService:
    """Runs the analysis engine over fetched price history."""

    def __init__(
        self,
        market_data: MarketDataService,
        directory: StockDirectory,
        config: Optional[AnalysisConfig] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.market_data = market_data
        self.directory = directory
        self.config = config or AnalysisConfig()
        self._sleep = sleep
        self.logger = logger.bind(service="analysis_service")

    @classmethod
    def from_settings(cls, settings) -> "AnalysisService":
        return cls(
            market_data=MarketDataService.from_settings(settings),
            directory=StockDirectory(),
            config=AnalysisConfig.from_settings(settings),
        )

    async def analyze_stock(self, code: str) -> AnalysisRecord:
        """
        Fetch and analyze one stock.

        Raises:
            SourceUnavailableError: No price data could be fetched
            InsufficientDataError: Too little valid history
        """
        series = await self.market_data.get_price_series(code)
        name = self.directory.get_name(code)
        record = analyze_series(code, series, name, self.config)

        self.logger.info(
            "Stock analyzed",
            code=code,
            name=name,
            score=record.score.score,
            bias=record.strategy.bias.value,
        )
        return record

    async def analyze_many(
        self,
        codes: Sequence[str],
        progress_callback: Optional[ProgressCallback] = None,
        abort_event: Optional[asyncio.Event] = None,
    ) -> BatchOutcome:
        """
        Analyze codes one after another.

        Stocks are processed sequentially with ``request_delay_seconds`` between
        them so the price source's rate limit is respected. A failing code is
        logged and skipped. The abort event is checked before each stock.

        Args:
            codes: Stock codes in processing order
            progress_callback: Called with (completed, total) after every attempt
            abort_event: Set it to stop before the next stock

        Returns:
            BatchOutcome with records in input order
        """
        total = len(codes)
        outcome = BatchOutcome(total=total)
        started = time.monotonic()

        self.logger.info("Batch analysis started", total=total)

        for index, code in enumerate(codes):
            if abort_event is not None and abort_event.is_set():
                outcome.aborted = True
                self.logger.info(
                    "Batch analysis aborted", completed=outcome.completed, total=total
                )
                break

            if index > 0 and self.config.request_delay_seconds > 0:
                await self._sleep(self.config.request_delay_seconds)

            try:
                outcome.records.append(await self.analyze_stock(code))
            except ComputationError as e:
                outcome.failures[code] = e.message
                self.logger.error(
                    "Computation failed for stock",
                    code=code,
                    error=e.message,
                    details=e.details,
                    exc_info=True,
                )
            except TwSignalError as e:
                outcome.failures[code] = e.message
                self.logger.warning("Skipping stock", code=code, error=e.message)
            except Exception as e:
                outcome.failures[code] = str(e)
                self.logger.error(
                    "Unexpected error analyzing stock",
                    code=code,
                    error=str(e),
                    exc_info=True,
                )

            outcome.completed += 1
            if progress_callback is not None:
                progress_callback(outcome.completed, total)

        elapsed = time.monotonic() - started
        self.logger.info(
            "Batch analysis completed",
            total=total,
            succeeded=len(outcome.records),
            failed=len(outcome.failures),
            aborted=outcome.aborted,
            elapsed_seconds=round(elapsed, 2),
        )
        log_performance("analyze_many", elapsed * 1000, total=total)
        return outcome

    def list_sectors(self) -> List[SectorInfo]:
        return list_sectors()

    async def analyze_sector(
        self,
        sector_id: str,
        progress_callback: Optional[ProgressCallback] = None,
        abort_event: Optional[asyncio.Event] = None,
    ) -> BatchOutcome:
        """Analyze every stock of a built-in sector."""
        sector = get_sector(sector_id)
        self.logger.info("Sector analysis requested", sector=sector.id)
        return await self.analyze_many(sector.codes, progress_callback, abort_event)

    async def scan_universe(
        self,
        codes: Optional[Sequence[str]] = None,
        min_score: Optional[int] = None,
        progress_callback: Optional[ProgressCallback] = None,
        abort_event: Optional[asyncio.Event] = None,
    ) -> BatchOutcome:
        """
        Scan for high-scoring stocks.

        Args:
            codes: Codes to scan (defaults to every listed and OTC common stock)
            min_score: Minimum score kept (defaults to ``scan_min_score``)
            progress_callback: Called with (completed, total) after every attempt
            abort_event: Set it to stop before the next stock

        Returns:
            BatchOutcome whose records pass ``min_score``, best score first
        """
        if codes is None:
            codes = self.directory.listed_codes()
        if min_score is None:
            min_score = self.config.scan_min_score

        outcome = await self.analyze_many(codes, progress_callback, abort_event)
        outcome.records = sorted(
            (r for r in outcome.records if r.score.score >= min_score),
            key=lambda r: r.score.score,
            reverse=True,
        )

        self.logger.info(
            "Universe scan completed",
            scanned=outcome.completed,
            matches=len(outcome.records),
            min_score=min_score,
        )
        return outcome
