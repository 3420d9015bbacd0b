"""Entry point for The Todo client.

This module allows running the client as a module:
    python -m thetodo

Or as an installed command:
    thetodo
"""

import sys
from typing import Optional

from thetodo.config import Config
from thetodo.logging_config import get_logger, log_file_for, setup_logging

# Initialize logger for this module
logger = get_logger(__name__)


def main(args: Optional[list[str]] = None) -> int:
    """Main entry point for The Todo client.

    Args:
        args: Command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    if args is None:
        args = sys.argv[1:]

    # Logs live in the configured data directory
    config = Config()
    setup_logging(log_file=log_file_for(config.get_storage_config()['data_dir']))

    # Import here to keep startup light when only logging is needed
    from thetodo.ui.app import TheTodoApp

    try:
        app = TheTodoApp(config=config)
        app.run()
        logger.info("The Todo application exited normally")
        return 0
    except KeyboardInterrupt:
        logger.info("The Todo closed by user (Ctrl+C)")
        return 0
    except Exception:
        logger.error("Error running The Todo", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
