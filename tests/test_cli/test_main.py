"""Tests for the command-line entry point."""

import asyncio
import json
import signal
import sys
from unittest.mock import AsyncMock, Mock, patch

import pytest

sys.path.append("src")

import main
from twsignal.services.analysis import BatchOutcome

pytestmark = pytest.mark.skipif(
    sys.platform == "win32", reason="needs event loop signal handlers"
)


class InterruptedScanService:
    """Scan that receives Ctrl-C after its first stock."""

    def __init__(self):
        self.codes = None

    async def scan_universe(self, codes, progress_callback=None, abort_event=None):
        self.codes = codes
        progress_callback(1, len(codes))
        assert signal.getsignal(signal.SIGINT) is not signal.default_int_handler
        signal.raise_signal(signal.SIGINT)
        await asyncio.wait_for(abort_event.wait(), timeout=1)
        return BatchOutcome(total=len(codes), completed=1, aborted=True)


class TestRunCommand:
    """Test the -analyze and -scan commands."""

    @pytest.mark.asyncio
    async def test_analyze_prints_record(self, capsys):
        service = Mock()
        service.analyze_stock = AsyncMock(
            return_value=Mock(to_dict=Mock(return_value={"code": "2330"}))
        )

        with patch.object(sys, "argv", ["main.py", "-analyze", "2330"]):
            await main.run_command(service)

        service.analyze_stock.assert_awaited_once_with("2330")
        assert json.loads(capsys.readouterr().out) == {"code": "2330"}

    @pytest.mark.asyncio
    async def test_interrupted_scan_prints_partial_outcome(self, capsys):
        service = InterruptedScanService()

        with patch.object(sys, "argv", ["main.py", "-scan", "2330", "2454"]):
            await main.run_command(service)

        assert service.codes == ["2330", "2454"]
        captured = capsys.readouterr()
        assert "[1/2]" in captured.err
        assert "Interrupted after 1/2 stocks." in captured.err
        output = json.loads(captured.out)
        assert output["aborted"] is True
        assert output["completed"] == 1
