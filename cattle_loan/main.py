"""
Main entry point for the cattle loan application.

Parses command-line options, wires the form, storage and submission
workflow together and runs the interactive shell.
"""

import argparse
import asyncio
from pathlib import Path
from typing import List, Optional

from cattle_loan.config import settings
from cattle_loan.config.logging_config import configure_logging, get_logger
from cattle_loan.config.settings import PERSISTENCE_BACKENDS
from cattle_loan.data import create_repository
from cattle_loan.domain.application.form_state import FormState
from cattle_loan.domain.submission.orchestrator import SubmissionOrchestrator
from cattle_loan.events.event_interface import event_bus
from cattle_loan.presentation.cli import CliInterface

logger = get_logger(__name__)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.
    
    Args:
        argv: Argument list, defaults to ``sys.argv[1:]``
        
    Returns:
        argparse.Namespace: Parsed arguments
    """
    parser = argparse.ArgumentParser(description=settings.app_name)
    parser.add_argument(
        "--backend",
        choices=PERSISTENCE_BACKENDS,
        default=settings.persistence.backend,
        help="Where submitted applications are stored"
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=settings.persistence.data_dir,
        help="Directory for the json backend"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        default=settings.logging.level,
        help="Logging level"
    )
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    """
    Run the interactive shell until the user quits.
    
    Args:
        args: Parsed command-line arguments
        
    Returns:
        int: Process exit code
    """
    persistence = settings.persistence.model_copy(update={
        "backend": args.backend,
        "data_dir": args.data_dir,
    })
    repository = create_repository(persistence)
    if not await repository.connect():
        logger.error("Could not connect to application storage")
        return 1
    
    form = FormState.from_settings(settings.form)
    orchestrator = SubmissionOrchestrator(form, repository, event_bus)
    cli = CliInterface(form, orchestrator)
    
    try:
        await cli.run()
    finally:
        await repository.disconnect()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, configure logging and run the shell."""
    args = parse_arguments(argv)
    configure_logging(settings.logging.model_copy(update={"level": args.log_level}))
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    
    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
