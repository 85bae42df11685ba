"""Component for choosing questions and the exam mode before starting."""

from __future__ import annotations

from typing import Callable

from PySide6.QtWidgets import (
    QButtonGroup,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QRadioButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from exam_app.constants.exam_constants import (
    CORRECT_ANSWER_MARKS,
    DEFAULT_TIME_LIMIT_HOURS,
    MAX_TIME_LIMIT_HOURS,
    WRONG_ANSWER_PENALTY,
)
from exam_app.constants.ui_constants import (
    INVALID_TIME_LIMIT_MESSAGE,
    MODE_BUTTON_STOPWATCH,
    MODE_BUTTON_TIMER,
    SETUP_IMPORT_BUTTON,
    SETUP_RESUME_BUTTON,
    SETUP_START_BUTTON,
)
from exam_app.core.exam_manager import ExamManager
from exam_app.core.models import ExamMode
from exam_app.styling.styles import Styles


class SetupPanel(QWidget):
    """Shows the loaded question count and collects timer or stopwatch settings."""

    def __init__(
        self,
        exam_manager: ExamManager,
        on_start: Callable[[ExamMode, int | None], None],
        on_import: Callable[[], None],
        on_resume: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.exam_manager = exam_manager
        self.on_start = on_start
        self.on_import = on_import
        self.on_resume = on_resume
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.summary_label = QLabel("", self)
        self.summary_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.summary_label)

        file_row = QHBoxLayout()
        self.import_button = QPushButton(SETUP_IMPORT_BUTTON, self)
        self.import_button.clicked.connect(self.on_import)
        file_row.addWidget(self.import_button)
        self.resume_button = QPushButton(SETUP_RESUME_BUTTON, self)
        self.resume_button.clicked.connect(self.on_resume)
        file_row.addWidget(self.resume_button)
        file_row.addStretch()
        layout.addLayout(file_row)

        mode_group = QGroupBox("Exam Mode", self)
        mode_layout = QVBoxLayout()
        mode_group.setLayout(mode_layout)

        self.timer_radio = QRadioButton(MODE_BUTTON_TIMER, self)
        self.timer_radio.setToolTip("Set a time limit. The exam will auto-submit when time runs out.")
        self.stopwatch_radio = QRadioButton(MODE_BUTTON_STOPWATCH, self)
        self.stopwatch_radio.setToolTip("No time limit. Tracks how long you take to complete the exam.")
        self.mode_buttons = QButtonGroup(self)
        self.mode_buttons.addButton(self.timer_radio)
        self.mode_buttons.addButton(self.stopwatch_radio)
        self.timer_radio.setChecked(True)
        self.timer_radio.toggled.connect(self._update_time_inputs)
        mode_layout.addWidget(self.timer_radio)
        mode_layout.addWidget(self.stopwatch_radio)

        time_row = QHBoxLayout()
        self.hours_spinbox = QSpinBox(self)
        self.hours_spinbox.setRange(0, MAX_TIME_LIMIT_HOURS)
        self.hours_spinbox.setValue(DEFAULT_TIME_LIMIT_HOURS)
        self.hours_spinbox.setSuffix(" h")
        self.minutes_spinbox = QSpinBox(self)
        self.minutes_spinbox.setRange(0, 59)
        self.minutes_spinbox.setSuffix(" min")
        self.hours_spinbox.valueChanged.connect(self._update_time_inputs)
        self.minutes_spinbox.valueChanged.connect(self._update_time_inputs)
        time_row.addWidget(self.hours_spinbox)
        time_row.addWidget(self.minutes_spinbox)
        time_row.addStretch()
        mode_layout.addLayout(time_row)

        self.time_hint_label = QLabel("", self)
        mode_layout.addWidget(self.time_hint_label)
        layout.addWidget(mode_group)

        scheme_label = QLabel(
            f"Marking scheme: +{CORRECT_ANSWER_MARKS} correct, "
            f"-{WRONG_ANSWER_PENALTY} wrong, 0 skipped.",
            self,
        )
        layout.addWidget(scheme_label)
        layout.addStretch()

        self.start_button = QPushButton(SETUP_START_BUTTON, self)
        self.start_button.clicked.connect(self._handle_start)
        layout.addWidget(self.start_button)

        self.refresh()

    def refresh(self) -> None:
        count = len(self.exam_manager.get_questions())
        self.summary_label.setText(f"{count} questions ready for the exam")
        self._update_time_inputs()

    def _time_limit_seconds(self) -> int:
        return self.hours_spinbox.value() * 3600 + self.minutes_spinbox.value() * 60

    def _update_time_inputs(self) -> None:
        timer_mode = self.timer_radio.isChecked()
        self.hours_spinbox.setEnabled(timer_mode)
        self.minutes_spinbox.setEnabled(timer_mode)

        total_minutes = self._time_limit_seconds() // 60
        count = len(self.exam_manager.get_questions())
        if not timer_mode:
            self.time_hint_label.setText("")
        elif total_minutes == 0:
            self.time_hint_label.setText(INVALID_TIME_LIMIT_MESSAGE)
        elif count:
            self.time_hint_label.setText(
                f"Total: {total_minutes} minutes ({total_minutes / count:.1f} min/question)"
            )
        self.start_button.setEnabled(count > 0 and (not timer_mode or total_minutes > 0))

    def _handle_start(self) -> None:
        if self.timer_radio.isChecked():
            self.on_start(ExamMode.TIMER, self._time_limit_seconds())
        else:
            self.on_start(ExamMode.STOPWATCH, None)
