"""FastAPI server exposing the exam flow as a local JSON API."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
import logging
from threading import Thread
from typing import Iterator

from fastapi import Depends, FastAPI, HTTPException, Response
from pydantic import BaseModel, Field
import uvicorn

from exam_app.constants.about import APP_NAME, APP_VERSION
from exam_app.constants.exam_constants import TICK_INTERVAL_MS
from exam_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from exam_app.core.errors import (
    ExamStateError,
    IncompleteEvaluationError,
    InvalidConfigError,
    OutOfRangeError,
)
from exam_app.core.exam_manager import ExamManager
from exam_app.core.markdown_math_renderer import renderer
from exam_app.core.models import ExamMode, ExamQuestion, ExamSession
from exam_app.core.question_importer import QuestionImportError
from exam_app.core.records import (
    ClockSettingsRecord,
    CountdownSettingsRecord,
    QuestionRecord,
    ResultRecord,
)
from exam_app.core.services import countdown
from exam_app.core.services.answer_store import count_answered, count_remaining
from exam_app.core.services.scoring import question_status, score_percentage, seconds_per_question
from exam_app.core.services.self_evaluation import can_finalize, evaluated_count, evaluation_progress
from exam_app.core.services.ticker import ExamTicker
from exam_app.core.services.timer_engine import display_seconds, is_time_warning, remaining_seconds

logger = logging.getLogger(__name__)


class QuestionPayload(BaseModel):
    """Question as typed in by the user."""

    text: str
    options: list[str]


class QuestionSetPayload(BaseModel):
    questions: list[QuestionPayload] = Field(min_length=1)


class ImportPayload(BaseModel):
    """Plain-text question document."""

    text: str


class StartPayload(BaseModel):
    mode: ExamMode
    time_limit_seconds: int | None = None


class AnswerPayload(BaseModel):
    """Payload schema for selecting or clearing an option."""

    option_index: int | None
    question_index: int | None = None  # defaults to the current question


class NavigatePayload(BaseModel):
    target_index: int


class MarkPayload(BaseModel):
    question_index: int
    option_index: int | None


class CustomExamPayload(BaseModel):
    name: str
    date: str
    time: str | None = None


@contextmanager
def _http_errors() -> Iterator[None]:
    try:
        yield
    except IncompleteEvaluationError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ExamStateError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except (InvalidConfigError, OutOfRangeError, QuestionImportError, ValueError) as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


def _session_view(manager: ExamManager, session: ExamSession) -> dict[str, object]:
    question = session.current_question
    return {
        "state": manager.get_state().name,
        "mode": session.mode.value,
        "is_submitted": session.is_submitted,
        "start_instant": session.start_instant.isoformat(),
        "time_limit_seconds": session.time_limit_seconds,
        "elapsed_seconds": session.elapsed_seconds,
        "remaining_seconds": remaining_seconds(session),
        "display_seconds": display_seconds(session),
        "time_warning": is_time_warning(session),
        "current_index": session.current_index,
        "total_questions": len(session.questions),
        "answered": count_answered(session),
        "unanswered": count_remaining(session),
        "question": {
            "id": question.id,
            "html": renderer.render_fragment(question.text),
            "text": question.text,
            "options": list(question.options),
            "selected_option": question.selected_option,
        },
        "palette": [
            {
                "index": index,
                "answered": q.selected_option is not None,
                "current": index == session.current_index,
            }
            for index, q in enumerate(session.questions)
        ],
    }


def _evaluation_view(questions: tuple[ExamQuestion, ...]) -> dict[str, object]:
    return {
        "questions": [
            {**QuestionRecord.from_domain(q).model_dump(), "status": question_status(q).value}
            for q in questions
        ],
        "evaluated": evaluated_count(questions),
        "total": len(questions),
        "progress": evaluation_progress(questions),
        "can_finalize": can_finalize(questions),
    }


def _result_view(record: ResultRecord) -> dict[str, object]:
    result = record.to_domain()
    return {
        **record.model_dump(mode="json"),
        "score_percentage": score_percentage(result),
        "seconds_per_question": seconds_per_question(result),
    }


def _get_exam_manager_dependency(exam_manager: ExamManager):
    def dependency() -> ExamManager:
        return exam_manager

    return dependency


def create_api_app(
    exam_manager: ExamManager,
    start_ticker: bool = True,
    tick_interval_seconds: float = TICK_INTERVAL_MS / 1000,
) -> FastAPI:
    """Create a FastAPI application wired to the provided exam manager."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION)
    manager_dep = _get_exam_manager_dependency(exam_manager)
    tickers: list[ExamTicker] = []  # at most one, the latest
    app.state.tickers = tickers

    def ensure_ticking() -> None:
        if not start_ticker:
            return
        if tickers and tickers[-1].is_running():
            return

        def on_tick() -> bool:
            exam_manager.tick()
            return exam_manager.needs_ticks()

        ticker = ExamTicker(on_tick, interval_seconds=tick_interval_seconds)
        tickers[:] = [ticker]
        ticker.start()

    # --- Questions ---

    @app.get("/questions")
    def get_questions(manager: ExamManager = Depends(manager_dep)) -> dict[str, object]:
        return {"questions": [QuestionRecord.from_domain(q).model_dump() for q in manager.get_questions()]}

    @app.post("/questions", status_code=201)
    def replace_questions(
        payload: QuestionSetPayload,
        manager: ExamManager = Depends(manager_dep),
    ) -> dict[str, object]:
        questions = [
            ExamQuestion(id=position, text=q.text, options=tuple(q.options))
            for position, q in enumerate(payload.questions, start=1)
        ]
        with _http_errors():
            manager.load_questions(questions)
        return {"loaded": len(questions)}

    @app.post("/questions/import", status_code=201)
    def import_questions(
        payload: ImportPayload,
        manager: ExamManager = Depends(manager_dep),
    ) -> dict[str, object]:
        with _http_errors():
            loaded = manager.import_questions_text(payload.text)
        return {"loaded": loaded}

    # --- Exam session ---

    @app.post("/exam/start", status_code=201)
    def start_exam(payload: StartPayload, manager: ExamManager = Depends(manager_dep)) -> dict[str, object]:
        with _http_errors():
            session = manager.start_exam(payload.mode, payload.time_limit_seconds)
        ensure_ticking()
        return _session_view(manager, session)

    @app.post("/exam/resume")
    def resume_exam(manager: ExamManager = Depends(manager_dep)) -> dict[str, object]:
        with _http_errors():
            session = manager.resume_saved_session()
        if session is None:
            raise HTTPException(status_code=404, detail="No saved exam to resume.")
        ensure_ticking()
        return _session_view(manager, session)

    @app.get("/exam")
    def get_exam(manager: ExamManager = Depends(manager_dep)) -> dict[str, object]:
        manager.tick()
        session = manager.get_session()
        if session is None:
            raise HTTPException(status_code=404, detail="No exam session is active.")
        return _session_view(manager, session)

    @app.post("/exam/answer")
    def select_answer(payload: AnswerPayload, manager: ExamManager = Depends(manager_dep)) -> dict[str, object]:
        with _http_errors():
            if payload.question_index is None:
                applied = manager.select_current(payload.option_index)
            else:
                applied = manager.select_answer(payload.question_index, payload.option_index)
        return {"applied": applied, **_session_view(manager, manager.get_session())}

    @app.post("/exam/navigate")
    def navigate(payload: NavigatePayload, manager: ExamManager = Depends(manager_dep)) -> dict[str, object]:
        with _http_errors():
            applied = manager.navigate(payload.target_index)
        return {"applied": applied, **_session_view(manager, manager.get_session())}

    @app.post("/exam/next")
    def next_question(manager: ExamManager = Depends(manager_dep)) -> dict[str, object]:
        with _http_errors():
            applied = manager.next_question()
        return {"applied": applied, **_session_view(manager, manager.get_session())}

    @app.post("/exam/previous")
    def previous_question(manager: ExamManager = Depends(manager_dep)) -> dict[str, object]:
        with _http_errors():
            applied = manager.previous_question()
        return {"applied": applied, **_session_view(manager, manager.get_session())}

    @app.post("/exam/submit")
    def submit_exam(manager: ExamManager = Depends(manager_dep)) -> dict[str, object]:
        with _http_errors():
            session = manager.submit()
        return _session_view(manager, session)

    @app.delete("/exam", status_code=204)
    def abandon_exam(manager: ExamManager = Depends(manager_dep)) -> Response:
        manager.abandon()
        return Response(status_code=204)

    # --- Self-evaluation ---

    @app.get("/evaluation")
    def get_evaluation(manager: ExamManager = Depends(manager_dep)) -> dict[str, object]:
        with _http_errors():
            questions = manager.get_evaluation_questions()
        return _evaluation_view(questions)

    @app.post("/evaluation/mark")
    def mark_correct(payload: MarkPayload, manager: ExamManager = Depends(manager_dep)) -> dict[str, object]:
        with _http_errors():
            questions = manager.mark_correct(payload.question_index, payload.option_index)
        return _evaluation_view(questions)

    @app.post("/evaluation/finalize", status_code=201)
    def finalize(manager: ExamManager = Depends(manager_dep)) -> dict[str, object]:
        with _http_errors():
            result = manager.finalize()
        return _result_view(ResultRecord.from_domain(result))

    # --- Results ---

    @app.get("/results")
    def get_results(manager: ExamManager = Depends(manager_dep)) -> dict[str, object]:
        return {
            "results": [_result_view(ResultRecord.from_domain(r)) for r in manager.get_results_history()]
        }

    # --- Preferences and countdown ---

    @app.get("/settings/clock")
    def get_clock_settings(manager: ExamManager = Depends(manager_dep)) -> ClockSettingsRecord:
        return ClockSettingsRecord.from_domain(manager.get_clock_settings())

    @app.put("/settings/clock")
    def put_clock_settings(
        payload: ClockSettingsRecord,
        manager: ExamManager = Depends(manager_dep),
    ) -> dict[str, object]:
        return {"saved": manager.save_clock_settings(payload.to_domain())}

    @app.get("/settings/countdown")
    def get_countdown_settings(manager: ExamManager = Depends(manager_dep)) -> CountdownSettingsRecord:
        return CountdownSettingsRecord.from_domain(manager.get_countdown_settings())

    @app.put("/settings/countdown")
    def put_countdown_settings(
        payload: CountdownSettingsRecord,
        manager: ExamManager = Depends(manager_dep),
    ) -> dict[str, object]:
        return {"saved": manager.save_countdown_settings(payload.to_domain())}

    @app.get("/countdown")
    def get_countdown(manager: ExamManager = Depends(manager_dep)) -> dict[str, object]:
        settings = manager.get_countdown_settings()
        exam = countdown.selected_exam(settings)
        remaining = countdown.time_until(exam.target(), datetime.now())
        return {
            "exam": {"id": exam.id, "name": exam.name, "date": exam.date, "time": exam.time},
            "days": remaining.days,
            "hours": remaining.hours,
            "minutes": remaining.minutes,
            "seconds": remaining.seconds,
            "is_expired": remaining.is_expired,
        }

    @app.post("/countdown/exams", status_code=201)
    def add_custom_exam(
        payload: CustomExamPayload,
        manager: ExamManager = Depends(manager_dep),
    ) -> CountdownSettingsRecord:
        with _http_errors():
            settings = countdown.add_custom_exam(
                manager.get_countdown_settings(), payload.name, payload.date, payload.time
            )
        manager.save_countdown_settings(settings)
        return CountdownSettingsRecord.from_domain(settings)

    @app.delete("/countdown/exams/{exam_id}")
    def remove_custom_exam(exam_id: str, manager: ExamManager = Depends(manager_dep)) -> CountdownSettingsRecord:
        settings = countdown.remove_custom_exam(manager.get_countdown_settings(), exam_id)
        manager.save_countdown_settings(settings)
        return CountdownSettingsRecord.from_domain(settings)

    return app


def start_api_server(
    exam_manager: ExamManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    start_ticker: bool = True,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(exam_manager, start_ticker=start_ticker)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="ExamApiServer", daemon=True)
    thread.start()
    logger.info("Exam API listening on http://%s:%d/", host, port)
    return thread
