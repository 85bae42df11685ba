"""Component for displaying a scored result and recent history."""

from __future__ import annotations

from typing import Callable

from PySide6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from exam_app.constants.exam_constants import CORRECT_ANSWER_MARKS, WRONG_ANSWER_PENALTY
from exam_app.constants.ui_constants import RESULTS_HOME_BUTTON, RESULTS_RETRY_BUTTON
from exam_app.core.exam_manager import ExamManager
from exam_app.core.models import ExamResult
from exam_app.core.services.scoring import score_percentage, seconds_per_question
from exam_app.styling.styles import Styles
from exam_app.utils.time_format import format_duration


class ResultsPanel(QWidget):
    """Score card for the last exam plus the stored result history."""

    def __init__(
        self,
        exam_manager: ExamManager,
        on_retry: Callable[[], None],
        on_home: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.exam_manager = exam_manager
        self._build_ui(on_retry, on_home)

    def _build_ui(self, on_retry: Callable[[], None], on_home: Callable[[], None]) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.score_label = QLabel("", self)
        self.score_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.score_label)

        self.summary_label = QLabel("", self)
        self.summary_label.setWordWrap(True)
        layout.addWidget(self.summary_label)

        self.breakdown_label = QLabel("", self)
        layout.addWidget(self.breakdown_label)

        history_group = QGroupBox("Recent results", self)
        history_layout = QVBoxLayout()
        history_group.setLayout(history_layout)
        self.history_list = QListWidget(self)
        history_layout.addWidget(self.history_list)
        layout.addWidget(history_group, stretch=1)

        button_row = QHBoxLayout()
        self.retry_button = QPushButton(RESULTS_RETRY_BUTTON, self)
        self.retry_button.clicked.connect(on_retry)
        button_row.addWidget(self.retry_button)
        self.home_button = QPushButton(RESULTS_HOME_BUTTON, self)
        self.home_button.clicked.connect(on_home)
        button_row.addWidget(self.home_button)
        layout.addLayout(button_row)

    def show_result(self, result: ExamResult) -> None:
        self.score_label.setText(
            f"Score: {result.score} / {result.max_score} ({score_percentage(result):.1f}% of maximum marks)"
        )
        self.summary_label.setText(
            f"Accuracy {result.accuracy:.1f}%  |  "
            f"Attempted {result.attempted}/{result.total_questions}  |  "
            f"Time {format_duration(result.time_taken_seconds)}  |  "
            f"{seconds_per_question(result):.0f}s per question"
        )
        self.breakdown_label.setText(
            f"Correct {result.correct} (+{result.correct * CORRECT_ANSWER_MARKS})   "
            f"Wrong {result.wrong} (-{result.wrong * WRONG_ANSWER_PENALTY})   "
            f"Skipped {result.skipped} (0)"
        )

        self.history_list.clear()
        for item in self.exam_manager.get_results_history():
            self.history_list.addItem(
                f"{item.date.astimezone().strftime('%Y-%m-%d %H:%M')}  "
                f"{item.score}/{item.max_score}  accuracy {item.accuracy:.1f}%"
            )
