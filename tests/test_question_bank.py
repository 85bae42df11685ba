from __future__ import annotations

import pytest

from exam_app.core.errors import OutOfRangeError
from exam_app.core.models import ExamQuestion
from exam_app.core.services.question_bank import QuestionBank

from conftest import answered, make_questions


def _question(text: str) -> ExamQuestion:
    return ExamQuestion(id=0, text=text, options=("a", "b", "c", "d"))


def test_load_renumbers_and_strips_state():
    bank = QuestionBank()
    source = tuple(answered(q, 1, 2) for q in make_questions(3))
    bank.load_questions(list(reversed(source)))

    questions = bank.get_questions()
    assert [q.id for q in questions] == [1, 2, 3]
    assert [q.text for q in questions] == ["Question 3?", "Question 2?", "Question 1?"]
    assert all(q.selected_option is None and q.correct_option is None for q in questions)


def test_empty_load_rejected():
    with pytest.raises(ValueError):
        QuestionBank().load_questions([])


@pytest.mark.parametrize(
    "question",
    [
        ExamQuestion(id=1, text="   ", options=("a", "b", "c", "d")),
        ExamQuestion(id=1, text="Two options", options=("a", "b")),
        ExamQuestion(id=1, text="Blank option", options=("a", " ", "c", "d")),
    ],
)
def test_invalid_questions_rejected(question):
    with pytest.raises(ValueError):
        QuestionBank().add_question(question)


def test_add_update_delete():
    bank = QuestionBank()
    assert not bank.has_questions()

    added = bank.add_question(_question(" First "))
    assert added.id == 1
    assert added.text == "First"
    bank.add_question(_question("Second"))
    bank.add_question(_question("Third"))
    assert bank.get_question_count() == 3

    bank.update_question(1, _question("Second, edited"))
    assert bank.get_questions()[1].text == "Second, edited"
    assert bank.get_questions()[1].id == 2

    bank.delete_question(0)
    assert [(q.id, q.text) for q in bank.get_questions()] == [(1, "Second, edited"), (2, "Third")]


def test_last_question_cannot_be_deleted():
    bank = QuestionBank()
    bank.add_question(_question("Only"))
    with pytest.raises(ValueError):
        bank.delete_question(0)


@pytest.mark.parametrize("index", [-1, 3])
def test_index_bounds(index):
    bank = QuestionBank()
    bank.load_questions(make_questions(3))
    with pytest.raises(OutOfRangeError):
        bank.update_question(index, _question("x"))
    with pytest.raises(OutOfRangeError):
        bank.delete_question(index)
