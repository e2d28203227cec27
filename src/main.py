"""
twsignal - Main application entry point.

Runs the analysis API, or analyzes from the command line:

    python src/main.py -analyze 2330
    python src/main.py -sector semiconductor
    python src/main.py -scan [CODE ...]
"""

import asyncio
import json
import signal
import sys

import uvicorn
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from twsignal.config.logging import get_logger
from twsignal.core.exceptions import TwSignalError
from twsignal.services import AnalysisService
from twsignal.utils import initialize_application

COMMANDS = ("-analyze", "-sector", "-scan")


def print_json(data) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def print_progress(completed: int, total: int) -> None:
    print(f"[{completed}/{total}]", file=sys.stderr)


def flag_argument(flag: str) -> str:
    """Value following a command-line flag."""
    try:
        return sys.argv[sys.argv.index(flag) + 1]
    except IndexError:
        print(f"Error: Please provide a value after the {flag} flag.")
        sys.exit(1)


def abort_on_interrupt(abort_event: asyncio.Event) -> bool:
    """
    Make Ctrl-C set ``abort_event`` instead of raising KeyboardInterrupt.

    A batch then stops before its next stock and still prints what it finished.
    Returns False where the event loop has no signal support.
    """
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, abort_event.set)
    except NotImplementedError:
        get_logger(__name__).debug("Signal handlers unsupported by event loop")
        return False
    return True


async def run_command(service: AnalysisService) -> None:
    if "-analyze" in sys.argv:
        record = await service.analyze_stock(flag_argument("-analyze"))
        print_json(record.to_dict())
        return

    abort_event = asyncio.Event()
    handler_installed = abort_on_interrupt(abort_event)
    try:
        if "-sector" in sys.argv:
            outcome = await service.analyze_sector(
                flag_argument("-sector"),
                progress_callback=print_progress,
                abort_event=abort_event,
            )
        else:
            codes = sys.argv[sys.argv.index("-scan") + 1 :] or None
            outcome = await service.scan_universe(
                codes, progress_callback=print_progress, abort_event=abort_event
            )
    finally:
        if handler_installed:
            asyncio.get_running_loop().remove_signal_handler(signal.SIGINT)

    if outcome.aborted:
        print(
            f"Interrupted after {outcome.completed}/{outcome.total} stocks.",
            file=sys.stderr,
        )
    print_json(outcome.to_dict())


def main() -> None:
    """Main application entry point."""
    settings = initialize_application()
    logger = get_logger(__name__)

    if any(flag in sys.argv for flag in COMMANDS):
        service = AnalysisService.from_settings(settings)
        try:
            asyncio.run(run_command(service))
        except TwSignalError as e:
            logger.error("Analysis failed", error=e.message, details=e.details)
            print(f"Error: {e.message}")
            sys.exit(1)
        except KeyboardInterrupt:
            logger.info("Received interrupt signal")
            print("\nInterrupted.")
            sys.exit(130)
        return

    logger.info(
        "Starting API server",
        host=settings.endpoint_host,
        port=settings.endpoint_port,
    )
    try:
        uvicorn.run(
            "twsignal.webapi.app:create_app",
            factory=True,
            host=settings.endpoint_host,
            port=settings.endpoint_port,
            reload=settings.api_reload,
            log_level=settings.api_log_level.lower(),
        )
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
        print("\nShutting down...")


if __name__ == "__main__":
    main()
