"""Development entry point for running the onboarding dashboard."""

import logging
import sys
from onboard.app import create_app
from onboard.services.datastore import DataLoadError
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger("onboard")

if __name__ == "__main__":
    try:
        app = create_app()
    except DataLoadError as e:
        logger.error("Dashboard not started: %s", e)
        sys.exit(1)
    app.run(host="127.0.0.1", port=5000)
