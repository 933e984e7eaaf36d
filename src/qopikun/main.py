"""
Entry point for the Qopikun inspection room backend.

Initializes logging and the database, seeds demo data on first run and
logs the scheduled inspections.

Configuration (environment):
- QOPIKUN_DATABASE: database file path (default ~/.qopikun/inspection_room.db)
- QOPIKUN_IMAGE_ENDPOINT: GD&T image service URL (image generation is
  disabled when unset)
- QOPIKUN_IMAGE_API_KEY: optional bearer token for the image service
"""

import logging
import os
import sys
from pathlib import Path

from .core.services.image_generation import HttpGdtImageGenerator
from .database.seed import seed_demo_data
from .service_factory import create_services

# Enable logging for debugging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)

logger = logging.getLogger(__name__)


def main() -> int:
    database = os.environ.get("QOPIKUN_DATABASE")
    endpoint = os.environ.get("QOPIKUN_IMAGE_ENDPOINT")

    image_generator = None
    if endpoint:
        image_generator = HttpGdtImageGenerator(
            endpoint, api_key=os.environ.get("QOPIKUN_IMAGE_API_KEY")
        )

    services = create_services(
        database_path=Path(database) if database else None,
        image_generator=image_generator
    )

    try:
        if seed_demo_data(services.identity_service, services.inspection_service):
            logger.info("Initialized new database with demo data")

        for report in services.inspection_service.list_all():
            state = report.final_status if report.is_complete else "open"
            logger.info(f"Inspection {report.id}: {report.title} [{state}]")
    finally:
        services.connection.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
