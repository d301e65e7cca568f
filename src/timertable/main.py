"""
Application Initialization
==========================
Constructs the engine, the window and the Qt event loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Sets up logging.
2. Instantiates the timer engine (the single owner of all timers).
3. Passes the engine into the Main Window so the view never creates its own.
"""
import logging
import os
import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QCoreApplication, QSettings

from timertable.config import ORG_ID, APP_ID, VISIBLE_APP_NAME
from timertable.logging_config import setup_logging, level_from_env, log_file_from_env
from timertable.model.engine import InMemoryTimerEngine
from timertable.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def create_app() -> QApplication:
    """Create and configure the QApplication instance."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setApplicationName(APP_ID)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationDisplayName(VISIBLE_APP_NAME)
    return app


def main() -> None:
    setup_logging(level=level_from_env(), log_file=log_file_from_env())

    app = create_app()

    engine = InMemoryTimerEngine()

    window = MainWindow(engine)
    window.show()
    logger.info("Timer view opened.")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
