"""Qt main window moving through setup, exam, evaluation and results."""

from __future__ import annotations

from enum import Enum, auto
import logging
from pathlib import Path

from PySide6.QtCore import QTimer
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from exam_app.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from exam_app.constants.exam_constants import TICK_INTERVAL_MS
from exam_app.constants.ui_constants import (
    CANNOT_CALCULATE_MESSAGE,
    IMPORT_DIALOG_TITLE,
    IMPORT_FILE_FILTER,
    NO_QUESTIONS_MESSAGE,
    RESULTS_HOME_BUTTON,
    TIME_UP_MESSAGE,
    WINDOW_TITLE,
)
from exam_app.core.errors import ExamError, IncompleteEvaluationError
from exam_app.core.exam_manager import ExamManager
from exam_app.core.models import ExamMode, TimerSignal
from exam_app.core.question_importer import QuestionImportError, load_questions_from_file
from exam_app.styling.styles import Styles
from exam_app.ui.components.evaluation_panel import EvaluationPanel
from exam_app.ui.components.exam_panel import ExamPanel
from exam_app.ui.components.results_panel import ResultsPanel
from exam_app.ui.components.setup_panel import SetupPanel
from exam_app.ui.dialog_helpers import (
    confirm_abandon,
    confirm_resume,
    show_error,
    show_info,
    show_warning,
)

logger = logging.getLogger(__name__)


class ExamStage(Enum):
    """Which panel the window shows."""

    SETUP = auto()
    EXAM = auto()
    EVALUATE = auto()
    RESULTS = auto()


class ExamMainWindow(QMainWindow):
    """Main Qt window; the QTimer here is the session's tick source."""

    def __init__(self, exam_manager: ExamManager, api_url: str | None = None) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE if api_url is None else f"{WINDOW_TITLE} ({api_url})")
        self.exam_manager = exam_manager
        self._stage = ExamStage.SETUP

        self._build_ui()
        self._configure_tick_timer()
        self._configure_shortcuts()
        self.setStyleSheet(Styles.get_main_window_style())
        QTimer.singleShot(0, self._offer_resume)

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)
        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        button_row = QHBoxLayout()
        self.home_button = QPushButton(RESULTS_HOME_BUTTON, self)
        self.home_button.clicked.connect(self._handle_home)
        button_row.addWidget(self.home_button)
        button_row.addStretch()
        self.help_button = QPushButton("Help", self)
        self.help_button.clicked.connect(lambda: show_info(self, "Help", HELP_TEXT))
        button_row.addWidget(self.help_button)
        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.clicked.connect(
            lambda: show_info(
                self,
                f"About {APP_NAME}",
                f"{APP_NAME} {APP_VERSION}\n\n{APP_ABOUT_TEXT}\n\n{APP_LICENSE}",
            )
        )
        button_row.addWidget(self.about_button)
        root_layout.addLayout(button_row)

        self.stage_stack = QStackedWidget(self)
        self.setup_panel = SetupPanel(
            self.exam_manager,
            on_start=self._start_exam,
            on_import=self._handle_import,
            on_resume=self._resume_exam,
            parent=self,
        )
        self.exam_panel = ExamPanel(self.exam_manager, on_submitted=self._enter_evaluation, parent=self)
        self.evaluation_panel = EvaluationPanel(self.exam_manager, on_calculate=self._calculate_results, parent=self)
        self.results_panel = ResultsPanel(
            self.exam_manager,
            on_retry=self._handle_retry,
            on_home=self._handle_home,
            parent=self,
        )
        for panel in (self.setup_panel, self.exam_panel, self.evaluation_panel, self.results_panel):
            self.stage_stack.addWidget(panel)
        root_layout.addWidget(self.stage_stack)
        self._set_stage(ExamStage.SETUP)

    def _configure_tick_timer(self) -> None:
        self.tick_timer = QTimer(self)
        self.tick_timer.setInterval(TICK_INTERVAL_MS)
        self.tick_timer.timeout.connect(self._handle_tick)

    def _configure_shortcuts(self) -> None:
        QShortcut(QKeySequence("F"), self, activated=self._toggle_fullscreen)
        QShortcut(QKeySequence("Escape"), self, activated=self.showNormal)

    def _toggle_fullscreen(self) -> None:
        if self.isFullScreen():
            self.showNormal()
        else:
            self.showFullScreen()

    def _set_stage(self, stage: ExamStage) -> None:
        self._stage = stage
        index_map = {
            ExamStage.SETUP: 0,
            ExamStage.EXAM: 1,
            ExamStage.EVALUATE: 2,
            ExamStage.RESULTS: 3,
        }
        self.stage_stack.setCurrentIndex(index_map[stage])
        if stage == ExamStage.SETUP:
            self.setup_panel.refresh()

    def _handle_tick(self) -> None:
        outcome = self.exam_manager.tick()
        if outcome is None:
            self.tick_timer.stop()
            return
        if self._stage == ExamStage.EXAM:
            self.exam_panel.refresh()
        if outcome.signal is TimerSignal.EXPIRED:
            self._enter_evaluation()
            show_info(self, "Time's up", TIME_UP_MESSAGE)

    def _handle_import(self) -> None:
        file_name, _ = QFileDialog.getOpenFileName(self, IMPORT_DIALOG_TITLE, "", IMPORT_FILE_FILTER)
        if not file_name:
            return
        try:
            imported = load_questions_from_file(Path(file_name))
            self.exam_manager.load_questions(imported.questions)
        except (QuestionImportError, ExamError, ValueError) as exc:
            show_error(self, "Import failed", str(exc))
            return
        self.setup_panel.refresh()

    def _start_exam(self, mode: ExamMode, time_limit_seconds: int | None) -> None:
        if not self.exam_manager.has_questions():
            show_warning(self, "No questions", NO_QUESTIONS_MESSAGE)
            return
        try:
            session = self.exam_manager.start_exam(mode, time_limit_seconds)
        except ExamError as exc:
            show_warning(self, "Cannot start exam", str(exc))
            return
        self.exam_panel.load_session(session)
        self._set_stage(ExamStage.EXAM)
        self.tick_timer.start()

    def _offer_resume(self) -> None:
        if self.exam_manager.has_saved_session() and confirm_resume(self):
            self._resume_exam()

    def _resume_exam(self) -> None:
        try:
            session = self.exam_manager.resume_saved_session()
        except ExamError as exc:
            show_warning(self, "Cannot resume", str(exc))
            return
        if session is None:
            show_info(self, "Nothing to resume", "No unfinished exam was found.")
            return
        self.tick_timer.start()
        if session.is_submitted:
            self._enter_evaluation()
        else:
            self.exam_panel.load_session(session)
            self._set_stage(ExamStage.EXAM)

    def _enter_evaluation(self) -> None:
        if self._stage == ExamStage.EVALUATE:
            return
        self.evaluation_panel.load_evaluation()
        self._set_stage(ExamStage.EVALUATE)

    def _calculate_results(self) -> None:
        try:
            result = self.exam_manager.finalize()
        except IncompleteEvaluationError:
            show_warning(self, "Cannot calculate yet", CANNOT_CALCULATE_MESSAGE)
            return
        self.tick_timer.stop()
        self.results_panel.show_result(result)
        self._set_stage(ExamStage.RESULTS)

    def _handle_retry(self) -> None:
        self._set_stage(ExamStage.SETUP)

    def _handle_home(self) -> None:
        if self._stage in (ExamStage.EXAM, ExamStage.EVALUATE):
            if not confirm_abandon(self):
                return
            self.exam_manager.abandon()
            self.tick_timer.stop()
        self._set_stage(ExamStage.SETUP)
