"""Component for self-grading a submitted exam."""

from __future__ import annotations

from typing import Callable

from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from exam_app.constants.ui_constants import (
    EVALUATION_CALCULATE_BUTTON,
    EVALUATION_PROGRESS_TEMPLATE,
    EXAM_NEXT_BUTTON,
    EXAM_PREV_BUTTON,
)
from exam_app.core.exam_manager import ExamManager
from exam_app.core.markdown_math_renderer import renderer
from exam_app.core.models import QuestionStatus
from exam_app.core.services.scoring import question_status
from exam_app.core.services.self_evaluation import evaluated_count, evaluation_progress
from exam_app.styling.styles import Styles
from exam_app.utils.time_format import option_letter

_STATUS_LABELS = {
    QuestionStatus.SKIPPED: "Skipped",
    QuestionStatus.PENDING_EVALUATION: "Pending",
    QuestionStatus.CORRECT: "Correct",
    QuestionStatus.WRONG: "Wrong",
}


class EvaluationPanel(QWidget):
    """Lets the user mark the correct option for each attempted question."""

    def __init__(
        self,
        exam_manager: ExamManager,
        on_calculate: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.exam_manager = exam_manager
        self.on_calculate = on_calculate
        self._current_index = 0
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QHBoxLayout()
        self.setLayout(layout)

        self.question_list = QListWidget(self)
        self.question_list.currentRowChanged.connect(self._handle_row_changed)
        layout.addWidget(self.question_list, stretch=1)

        main_column = QVBoxLayout()
        header_row = QHBoxLayout()
        self.progress_label = QLabel("", self)
        header_row.addWidget(self.progress_label)
        self.progress_bar = QProgressBar(self)
        self.progress_bar.setRange(0, 100)
        self.progress_bar.setTextVisible(False)
        header_row.addWidget(self.progress_bar, stretch=1)
        self.calculate_button = QPushButton(EVALUATION_CALCULATE_BUTTON, self)
        self.calculate_button.clicked.connect(self.on_calculate)
        header_row.addWidget(self.calculate_button)
        main_column.addLayout(header_row)

        self.status_label = QLabel("", self)
        main_column.addWidget(self.status_label)

        self.question_view = QWebEngineView(self)
        main_column.addWidget(self.question_view, stretch=1)

        self.prompt_label = QLabel("Which option is correct?", self)
        main_column.addWidget(self.prompt_label)
        self.mark_row = QHBoxLayout()
        self.mark_buttons: list[QPushButton] = []
        main_column.addLayout(self.mark_row)

        nav_row = QHBoxLayout()
        self.prev_button = QPushButton(EXAM_PREV_BUTTON, self)
        self.prev_button.clicked.connect(lambda: self._show_question(self._current_index - 1))
        nav_row.addWidget(self.prev_button)
        self.next_button = QPushButton(EXAM_NEXT_BUTTON, self)
        self.next_button.clicked.connect(lambda: self._show_question(self._current_index + 1))
        nav_row.addWidget(self.next_button)
        main_column.addLayout(nav_row)

        layout.addLayout(main_column, stretch=3)

    def load_evaluation(self) -> None:
        questions = self.exam_manager.get_evaluation_questions()
        for button in self.mark_buttons:
            button.deleteLater()
        self.mark_buttons = []
        for idx in range(len(questions[0].options)):
            button = QPushButton(option_letter(idx), self)
            button.setCheckable(True)
            button.clicked.connect(lambda _checked=False, i=idx: self._handle_mark(i))
            self.mark_row.addWidget(button)
            self.mark_buttons.append(button)
        self._show_question(0)

    def _handle_row_changed(self, row: int) -> None:
        if row >= 0 and row != self._current_index:
            self._show_question(row)

    def _show_question(self, index: int) -> None:
        questions = self.exam_manager.get_evaluation_questions()
        if not 0 <= index < len(questions):
            return
        self._current_index = index
        question = questions[index]
        self.question_view.setHtml(
            renderer.wrap_with_mathjax(renderer.render_question(question.text, question.options))
        )
        self._refresh()

    def _handle_mark(self, option_index: int) -> None:
        questions = self.exam_manager.get_evaluation_questions()
        current = questions[self._current_index].correct_option
        self.exam_manager.mark_correct(
            self._current_index,
            None if current == option_index else option_index,
        )
        self._refresh()

    def _refresh(self) -> None:
        questions = self.exam_manager.get_evaluation_questions()
        question = questions[self._current_index]
        status = question_status(question)

        self.question_list.blockSignals(True)
        self.question_list.clear()
        for idx, q in enumerate(questions):
            self.question_list.addItem(f"{idx + 1}. {_STATUS_LABELS[question_status(q)]}")
        self.question_list.setCurrentRow(self._current_index)
        self.question_list.blockSignals(False)

        self.progress_label.setText(
            EVALUATION_PROGRESS_TEMPLATE.format(evaluated=evaluated_count(questions), total=len(questions))
        )
        self.progress_bar.setValue(int(evaluation_progress(questions)))
        self.calculate_button.setEnabled(self.exam_manager.can_finalize())

        if question.selected_option is None:
            self.status_label.setText("Skipped")
        else:
            self.status_label.setText(
                f"Your answer: {option_letter(question.selected_option)}  |  {_STATUS_LABELS[status]}"
            )
        self.status_label.setStyleSheet(Styles.get_status_style(status.value))

        attempted = question.selected_option is not None
        self.prompt_label.setVisible(attempted)
        for idx, button in enumerate(self.mark_buttons):
            button.setVisible(attempted)
            button.setChecked(question.correct_option == idx)

        self.prev_button.setEnabled(self._current_index > 0)
        self.next_button.setEnabled(self._current_index < len(questions) - 1)
