"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "ExamPrep"

MODE_BUTTON_TIMER: str = "Timer"
MODE_BUTTON_STOPWATCH: str = "Stopwatch"
SETUP_START_BUTTON: str = "Start Exam"
SETUP_IMPORT_BUTTON: str = "Import Questions"
SETUP_RESUME_BUTTON: str = "Resume Saved Exam"

EXAM_PREV_BUTTON: str = "Previous"
EXAM_NEXT_BUTTON: str = "Next"
EXAM_CLEAR_BUTTON: str = "Clear Selection"
EXAM_SUBMIT_BUTTON: str = "Submit"

EVALUATION_CALCULATE_BUTTON: str = "Calculate Results"
EVALUATION_PROGRESS_TEMPLATE: str = "{evaluated} of {total} evaluated"

RESULTS_RETRY_BUTTON: str = "Retake Exam"
RESULTS_HOME_BUTTON: str = "Home"

IMPORT_DIALOG_TITLE: str = "Select question file"
IMPORT_FILE_FILTER: str = "Question files (*.txt);;All files (*.*)"

NO_QUESTIONS_MESSAGE: str = "Please import some questions first."
INVALID_TIME_LIMIT_MESSAGE: str = "Please set a valid time duration for the exam."
CANNOT_CALCULATE_MESSAGE: str = "Cannot calculate yet: mark the correct option for every attempted question."
TIME_UP_MESSAGE: str = "Time is up. Your exam has been submitted."
