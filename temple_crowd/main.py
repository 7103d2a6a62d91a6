"""Main entry point for the crowd density predictor."""

import sys

from temple_crowd.utils.logger import setup_logger

logger = setup_logger("temple_crowd")


def main() -> None:
    """Print where to find the dashboard and the CLI."""
    logger.info("Temple Crowd Density Predictor")
    logger.info("Use 'streamlit run temple_crowd/dashboard/app.py' for the dashboard")
    logger.info("Use 'temple-crowd --help' for the CLI interface")


if __name__ == "__main__":
    sys.exit(main() or 0)
