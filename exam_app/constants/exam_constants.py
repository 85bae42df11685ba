"""Exam rules and persistence constants shared across UI and core layers."""

CORRECT_ANSWER_MARKS: int = 4
WRONG_ANSWER_PENALTY: int = 1
OPTIONS_PER_QUESTION: int = 4

RESULT_HISTORY_LIMIT: int = 50

TICK_INTERVAL_MS: int = 1000
TIME_WARNING_WINDOW_SECONDS: int = 300
DEFAULT_TIME_LIMIT_HOURS: int = 3
MAX_TIME_LIMIT_HOURS: int = 12

STORAGE_PATH_ENV_VAR: str = "EXAMPREP_STORAGE_PATH"
DEFAULT_STORAGE_FILENAME: str = "storage.json"
DEFAULT_STORAGE_DIRNAME: str = ".examprep"

CLOCK_SETTINGS_KEY: str = "examprep_clock_settings"
COUNTDOWN_SETTINGS_KEY: str = "examprep_countdown_settings"
EXAM_SESSION_KEY: str = "examprep_exam_session"
EXAM_RESULTS_KEY: str = "examprep_exam_results"
