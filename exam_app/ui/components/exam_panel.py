"""Component for answering questions while the exam clock runs."""

from __future__ import annotations

from typing import Callable

from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from exam_app.constants.ui_constants import (
    EXAM_CLEAR_BUTTON,
    EXAM_NEXT_BUTTON,
    EXAM_PREV_BUTTON,
    EXAM_SUBMIT_BUTTON,
)
from exam_app.core.exam_manager import ExamManager
from exam_app.core.markdown_math_renderer import renderer
from exam_app.core.models import ExamSession
from exam_app.core.services.answer_store import count_answered
from exam_app.core.services.timer_engine import display_seconds, is_time_warning
from exam_app.styling.styles import Styles
from exam_app.ui.dialog_helpers import confirm_submit
from exam_app.utils.time_format import format_clock, option_letter

_PALETTE_COLUMNS = 5


class ExamPanel(QWidget):
    """Question view, option buttons, question palette and the exam clock."""

    def __init__(
        self,
        exam_manager: ExamManager,
        on_submitted: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.exam_manager = exam_manager
        self.on_submitted = on_submitted
        self._rendered_question_id: int | None = None
        self._palette_buttons: list[QPushButton] = []
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QHBoxLayout()
        self.setLayout(layout)

        main_column = QVBoxLayout()
        header_row = QHBoxLayout()
        self.position_label = QLabel("", self)
        header_row.addWidget(self.position_label)
        header_row.addStretch()
        self.clock_label = QLabel("", self)
        header_row.addWidget(self.clock_label)
        self.submit_button = QPushButton(EXAM_SUBMIT_BUTTON, self)
        self.submit_button.clicked.connect(self._handle_submit)
        header_row.addWidget(self.submit_button)
        main_column.addLayout(header_row)

        self.question_view = QWebEngineView(self)
        main_column.addWidget(self.question_view, stretch=1)

        self.option_row = QHBoxLayout()
        self.option_buttons: list[QPushButton] = []
        main_column.addLayout(self.option_row)

        nav_row = QHBoxLayout()
        self.prev_button = QPushButton(EXAM_PREV_BUTTON, self)
        self.prev_button.clicked.connect(self._handle_previous)
        nav_row.addWidget(self.prev_button)
        self.clear_button = QPushButton(EXAM_CLEAR_BUTTON, self)
        self.clear_button.clicked.connect(self._handle_clear)
        nav_row.addWidget(self.clear_button)
        self.next_button = QPushButton(EXAM_NEXT_BUTTON, self)
        self.next_button.clicked.connect(self._handle_next)
        nav_row.addWidget(self.next_button)
        main_column.addLayout(nav_row)

        layout.addLayout(main_column, stretch=3)

        self.palette_group = QGroupBox("Questions", self)
        self.palette_layout = QGridLayout()
        self.palette_group.setLayout(self.palette_layout)
        self.answered_label = QLabel("", self)
        side_column = QVBoxLayout()
        side_column.addWidget(self.palette_group)
        side_column.addWidget(self.answered_label)
        side_column.addStretch()
        layout.addLayout(side_column, stretch=1)

    def load_session(self, session: ExamSession) -> None:
        """Rebuild option and palette buttons for a new session."""
        self._rendered_question_id = None
        for button in self.option_buttons + self._palette_buttons:
            button.deleteLater()
        self.option_buttons = []
        self._palette_buttons = []

        option_count = len(session.questions[0].options)
        for idx in range(option_count):
            button = QPushButton(option_letter(idx), self)
            button.setCheckable(True)
            button.clicked.connect(lambda _checked=False, i=idx: self._handle_select(i))
            self.option_row.addWidget(button)
            self.option_buttons.append(button)

        for idx in range(len(session.questions)):
            button = QPushButton(str(idx + 1), self)
            button.clicked.connect(lambda _checked=False, i=idx: self._handle_jump(i))
            self.palette_layout.addWidget(button, idx // _PALETTE_COLUMNS, idx % _PALETTE_COLUMNS)
            self._palette_buttons.append(button)

        self.refresh()

    def refresh(self) -> None:
        session = self.exam_manager.get_session()
        if session is None:
            return
        question = session.current_question
        total = len(session.questions)

        self.position_label.setText(f"Question {session.current_index + 1} of {total}")
        self.clock_label.setText(format_clock(display_seconds(session)))
        self.clock_label.setStyleSheet(Styles.get_clock_style(is_time_warning(session)))

        if self._rendered_question_id != question.id:
            self.question_view.setHtml(
                renderer.wrap_with_mathjax(renderer.render_question(question.text, question.options))
            )
            self._rendered_question_id = question.id

        for idx, button in enumerate(self.option_buttons):
            button.setChecked(question.selected_option == idx)
            button.setEnabled(not session.is_submitted)

        for idx, button in enumerate(self._palette_buttons):
            answered = session.questions[idx].selected_option is not None
            button.setStyleSheet(
                Styles.get_palette_button_style(answered, idx == session.current_index)
            )

        answered = count_answered(session)
        self.answered_label.setText(f"{answered} answered, {total - answered} not answered")
        self.prev_button.setEnabled(session.current_index > 0)
        self.next_button.setEnabled(session.current_index < total - 1)

    def _handle_select(self, option_index: int) -> None:
        self.exam_manager.select_current(option_index)
        self.refresh()

    def _handle_clear(self) -> None:
        self.exam_manager.clear_selection()
        self.refresh()

    def _handle_jump(self, index: int) -> None:
        self.exam_manager.navigate(index)
        self.refresh()

    def _handle_previous(self) -> None:
        self.exam_manager.previous_question()
        self.refresh()

    def _handle_next(self) -> None:
        self.exam_manager.next_question()
        self.refresh()

    def _handle_submit(self) -> None:
        session = self.exam_manager.get_session()
        if session is None:
            return
        if not confirm_submit(self, count_answered(session), len(session.questions)):
            return
        self.exam_manager.submit()
        self.on_submitted()
