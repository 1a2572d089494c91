from __future__ import annotations
import logging
import sys

from dotenv import load_dotenv


def main() -> int:
    # .env must be loaded before any config getter runs
    load_dotenv()

    from .logger import setup_logging
    setup_logging()
    log = logging.getLogger(__name__)

    from PyQt6.QtWidgets import QApplication
    from .config import APPLICATION_NAME, ORGANIZATION_NAME, get_api_key
    from .context import create_context
    from .main_ui import MainWindow

    if not get_api_key():
        log.error("API_KEY is not set; searches will fail until it is configured.")

    app = QApplication(sys.argv)
    app.setOrganizationName(ORGANIZATION_NAME)
    app.setApplicationName(APPLICATION_NAME)
    app.setApplicationDisplayName("Lente Local")
    ctx = create_context()
    ui = MainWindow(ctx)
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
