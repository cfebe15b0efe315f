"""Application entry point and setup for the Keyramp typing trainer."""

import logging
import sys

from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication

from keyramp.core.config import load_config
from keyramp.core.session import TypingSession
from keyramp.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Load the trainer config, create a session and start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Keyramp")
    app.setApplicationDisplayName("Keyramp")

    config = load_config()
    session = TypingSession(config)

    window = MainWindow(session=session, config=config)
    screen = QGuiApplication.primaryScreen()
    if screen is not None:
        geometry = screen.availableGeometry()
        window.resize(min(1100, geometry.width()), min(900, geometry.height()))
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
