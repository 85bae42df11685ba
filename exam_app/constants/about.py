"""Static metadata describing ExamPrep."""

APP_NAME = "ExamPrep"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "ExamPrep turns a list of multiple-choice questions into a real exam simulation. "
    "Take the exam against a countdown or a stopwatch, grade yourself afterwards, "
    "and keep a history of your last results."
)

HELP_TEXT = (
    "Questions can be typed in directly or imported from a .txt file using the format:\n\n"
    "Q: Which gas is most abundant in the atmosphere?\n"
    "A: Oxygen\nB: Nitrogen\nC: Argon\nD: Carbon dioxide\n\n"
    "---\n\n"
    "Q: What is $2^{10}$?\n"
    "A: 512\nB: 1000\nC: 1024\nD: 2048\n\n"
    "Answer keys are not imported. After submitting, mark the correct option for "
    "every question you attempted and the score is calculated (+4 correct, -1 wrong, 0 skipped)."
)
