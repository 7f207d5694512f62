"""
Airline Passenger Satisfaction - Statistics Shell

CLI entry point: loads the survey dataset and runs the interactive menu.
"""

import argparse
import logging
import sys

from src.agents.ingestion import SourceUnreadableError
from src.orchestrator import QueryOrchestrator
from src.menu import MenuSession, run_menu
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Airline Passenger Satisfaction - Descriptive Statistics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive menu over the default dataset
  python main.py

  # Use another CSV file
  python main.py --data data/airline_satisfaction_2023.csv

  # Print the comprehensive report and exit
  python main.py --report
        """
    )

    parser.add_argument(
        "--data",
        default=str(settings.DEFAULT_DATASET_PATH),
        help=f"Dataset CSV path (default: {settings.DEFAULT_DATASET_PATH})"
    )

    parser.add_argument(
        "--report",
        action="store_true",
        help="Print the comprehensive report and exit"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    args = parser.parse_args(argv)

    # Setup logging
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    print("=" * 60)
    print("Airline Passenger Satisfaction Data Processing System")
    print("=" * 60)
    print(f"Dataset: {args.data}")
    print("=" * 60)
    print()

    try:
        orchestrator = QueryOrchestrator(dataset_path=args.data)
        orchestrator.load()

        if args.report:
            print(orchestrator.comprehensive_report())
        else:
            run_menu(MenuSession(orchestrator=orchestrator))

        logger.info("Session finished")
        sys.exit(0)

    except SourceUnreadableError as e:
        logger.error(f"Failed to load dataset: {e}")
        print(f"\n❌ Failed to load dataset: {e}")
        sys.exit(1)

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        print("\n⚠️  Interrupted")
        sys.exit(1)


if __name__ == "__main__":
    main()
