"""JSON endpoints driving the typing session and its history."""

import datetime
from typing import Any, Dict, Optional

from flask import Blueprint, current_app, jsonify, make_response, request
from pydantic import BaseModel, ValidationError, field_validator

from models.session_result import SessionReport
from models.typing_session import InvalidInputError
from services.trainer_service import TrainerService

session_api = Blueprint("session_api", __name__)

TRAINER_EXTENSION_KEY = "trainer_service"


def to_local_naive(value: Optional[datetime.datetime]) -> Optional[datetime.datetime]:
    """Convert aware timestamps to naive local time, matching the server clock."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


class SessionStartModel(BaseModel):
    target_text: str


class SessionInputModel(BaseModel):
    typed_text: str
    timestamp: Optional[datetime.datetime] = None

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, v: Optional[datetime.datetime]) -> Optional[datetime.datetime]:
        return to_local_naive(v)


class SessionFinishModel(BaseModel):
    timestamp: Optional[datetime.datetime] = None

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, v: Optional[datetime.datetime]) -> Optional[datetime.datetime]:
        return to_local_naive(v)


def get_trainer() -> TrainerService:
    return current_app.extensions[TRAINER_EXTENSION_KEY]


def _state_payload(trainer: TrainerService) -> Dict[str, Any]:
    session = trainer.session
    return {
        "state": trainer.state.value,
        "status": trainer.status_label,
        "expected_length": len(session.expected_text),
        "typed_length": len(session.typed_text),
    }


def _report_payload(trainer: TrainerService, report: Optional[SessionReport]) -> Dict[str, Any]:
    payload = _state_payload(trainer)
    payload["report"] = report.to_dict() if report is not None else None
    return payload


def _invalid(message: str):
    return make_response(jsonify({"error": f"Invalid input: {message}"}), 400)


@session_api.route("/api/session/start", methods=["POST"])
def api_start_session():
    try:
        model = SessionStartModel(**(request.get_json(silent=True) or {}))
    except (TypeError, ValidationError) as e:
        return _invalid(str(e))
    trainer = get_trainer()
    try:
        trainer.start(model.target_text)
    except InvalidInputError as e:
        return _invalid(e.message)
    return make_response(jsonify(_state_payload(trainer)), 200)


@session_api.route("/api/session/input", methods=["POST"])
def api_session_input():
    try:
        model = SessionInputModel(**(request.get_json(silent=True) or {}))
    except (TypeError, ValidationError) as e:
        return _invalid(str(e))
    trainer = get_trainer()
    report = trainer.on_input(model.typed_text, model.timestamp)
    return make_response(jsonify(_report_payload(trainer, report)), 200)


@session_api.route("/api/session/finish", methods=["POST"])
def api_finish_session():
    try:
        model = SessionFinishModel(**(request.get_json(silent=True) or {}))
    except (TypeError, ValidationError) as e:
        return _invalid(str(e))
    trainer = get_trainer()
    report = trainer.finish(model.timestamp)
    return make_response(jsonify(_report_payload(trainer, report)), 200)


@session_api.route("/api/session/reset", methods=["POST"])
def api_reset_session():
    trainer = get_trainer()
    trainer.reset()
    return make_response(jsonify(_state_payload(trainer)), 200)


@session_api.route("/api/session/state", methods=["GET"])
def api_session_state():
    return make_response(jsonify(_state_payload(get_trainer())), 200)


@session_api.route("/api/session/practice", methods=["GET"])
def api_session_practice():
    """Practice text of the last session, ready to use as the next target."""
    try:
        text = get_trainer().load_practice_as_target()
    except InvalidInputError as e:
        return make_response(jsonify({"error": e.message}), 400)
    return make_response(jsonify({"practice_text": text}), 200)


@session_api.route("/api/history", methods=["GET"])
def api_history():
    history = get_trainer().load_history()
    return make_response(jsonify([result.to_record() for result in history]), 200)
