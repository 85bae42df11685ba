"""Plain-text question import.

One question per block; blocks are separated by blank lines or a ``---`` line::

    Q: What is $2 + 2$?
    A: 3
    B: 4
    C: 5
    D: 22

Lines without a marker continue the question or option above them. Answer
keys are not part of the format: the correct option is chosen by the user
during self-evaluation, so a ``CORRECT:`` line is an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import re

from exam_app.core.models import ExamQuestion


class QuestionImportError(Exception):
    """Raised when a question file cannot be parsed."""


@dataclass(slots=True)
class ImportedQuestions:
    source_path: Path | None
    questions: list[ExamQuestion]


_OPTION_LETTERS = ("A", "B", "C", "D")
_MARKER = re.compile(r"^(?P<key>Q|[A-D]|CORRECT)\s*:\s?(?P<rest>.*)$", re.IGNORECASE)
_SEPARATOR = re.compile(r"^\s*(?:---\s*)?$")


def load_questions_from_file(file_path: Path) -> ImportedQuestions:
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise QuestionImportError(f"Could not read {file_path}: {exc}") from exc
    return ImportedQuestions(source_path=file_path, questions=parse_questions_text(text))


def parse_questions_text(text: str) -> list[ExamQuestion]:
    """Parse a full document; ids are assigned 1..n in document order."""
    questions = [
        _parse_block(lines, question_id=position)
        for position, lines in enumerate(_split_blocks(text), start=1)
    ]
    if not questions:
        raise QuestionImportError("Question file did not contain any questions.")
    return questions


def _split_blocks(text: str) -> list[list[str]]:
    blocks: list[list[str]] = [[]]
    for line in text.splitlines():
        if _SEPARATOR.match(line):
            if blocks[-1]:
                blocks.append([])
        else:
            blocks[-1].append(line.strip())
    return [block for block in blocks if block]


def _parse_block(lines: list[str], question_id: int) -> ExamQuestion:
    sections: dict[str, list[str]] = {}
    current: str | None = None

    for line in lines:
        match = _MARKER.match(line)
        if match is None:
            if current is None:
                raise QuestionImportError(f"Question {question_id}: text outside of a section: '{line}'.")
            sections[current].append(line)
            continue

        key = match.group("key").upper()
        if key == "CORRECT":
            raise QuestionImportError(
                f"Question {question_id}: answer keys are not imported; mark correct options after the exam."
            )
        current = key
        sections[key] = [match.group("rest").strip()]

    question_text = "\n".join(sections.get("Q", [])).strip()
    if not question_text:
        raise QuestionImportError(f"Question {question_id}: question text missing (Q: ...)")
    missing = [letter for letter in _OPTION_LETTERS if letter not in sections]
    if missing:
        raise QuestionImportError(
            f"Question {question_id}: missing option(s) {', '.join(missing)}; exactly four (A-D) are required."
        )

    options = tuple("\n".join(sections[letter]).strip() for letter in _OPTION_LETTERS)
    if not all(options):
        raise QuestionImportError(f"Question {question_id}: option text cannot be empty.")
    return ExamQuestion(id=question_id, text=question_text, options=options)
