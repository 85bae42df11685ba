"""Application entry point for ExamPrep."""

from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from exam_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from exam_app.core.exam_manager import ExamManager
from exam_app.core.storage import ExamStorage, JsonFileStore
from exam_app.server.api_server import start_api_server
from exam_app.ui.exam_main_window import ExamMainWindow
from exam_app.utils.logging_config import configure_logging


def main() -> None:
    """Initialize logging and storage, start the local API, and launch the Qt UI."""
    logger = configure_logging()
    logger.info("Starting ExamPrep…")

    store = JsonFileStore.from_environment()
    logger.info("Persisting to %s", store.path)
    exam_manager = ExamManager(storage=ExamStorage(store))

    # The Qt window drives the clock itself, so the API does not start a second ticker.
    start_api_server(exam_manager=exam_manager, host=DEFAULT_HOST, port=DEFAULT_PORT, start_ticker=False)
    api_url = f"http://{DEFAULT_HOST}:{DEFAULT_PORT}/"

    app = QApplication(sys.argv)
    window = ExamMainWindow(exam_manager=exam_manager, api_url=api_url)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
