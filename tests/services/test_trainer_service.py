"""Tests for TrainerService wiring of session, history and practice text."""

from datetime import datetime, timedelta
from typing import Optional

import pytest

from db.exceptions import DatabaseError
from models.history_manager import HistoryManager
from models.typing_session import InvalidInputError, SessionState
from services import init_services
from services.trainer_service import TrainerService

T0 = datetime(2026, 10, 18, 9, 0, 0)


def at(ms: int) -> datetime:
    return T0 + timedelta(milliseconds=ms)


class ReadOnlyStore:
    """Key/value store whose writes always fail."""

    def get_value(self, key: str) -> Optional[str]:
        return None

    def set_value(self, key: str, value: str) -> None:
        raise DatabaseError("disk I/O error")

    def delete_value(self, key: str) -> None:
        raise DatabaseError("disk I/O error")


def test_status_follows_session(trainer: TrainerService) -> None:
    assert trainer.state is SessionState.IDLE
    assert trainer.status_label == "Not started"
    trainer.start("abc")
    assert trainer.status_label == "Running..."
    trainer.reset()
    assert trainer.state is SessionState.IDLE


def test_start_rejects_blank_text(trainer: TrainerService) -> None:
    with pytest.raises(InvalidInputError) as exc_info:
        trainer.start("   ")
    assert "target text" in exc_info.value.message
    assert trainer.state is SessionState.IDLE


def test_auto_finish_persists_result(trainer: TrainerService) -> None:
    trainer.start("cat")
    assert trainer.on_input("c", at(0)) is None
    assert trainer.on_input("co", at(300)) is None
    report = trainer.on_input("cot", at(900))

    assert report is not None
    assert trainer.last_report == report
    history = trainer.load_history()
    assert len(history) == 1
    assert history[0].accuracy == 67
    assert history[0].avg_hesitation == 450


def test_manual_finish_uses_clock(history_manager: HistoryManager) -> None:
    service = TrainerService(history_manager, clock=lambda: at(30_000))
    service.start("a longer passage")
    service.on_input("a", at(0))
    report = service.finish()
    assert report is not None
    assert report.result.time_taken == 30
    assert report.result.timestamp == at(30_000)
    assert len(service.load_history()) == 1


def test_finish_when_idle_does_not_persist(trainer: TrainerService) -> None:
    assert trainer.finish(at(0)) is None
    assert trainer.load_history() == []


def test_load_practice_requires_a_finished_session(trainer: TrainerService) -> None:
    with pytest.raises(InvalidInputError):
        trainer.load_practice_as_target()


def test_load_practice_rejects_placeholder(trainer: TrainerService) -> None:
    trainer.start("abc")
    trainer.finish(at(0))
    assert trainer.practice_text is not None
    with pytest.raises(InvalidInputError):
        trainer.load_practice_as_target()


def test_practice_text_can_start_next_session(trainer: TrainerService) -> None:
    trainer.start("ab")
    trainer.on_input("a", at(0))
    trainer.on_input("ax", at(100))

    practice = trainer.load_practice_as_target()
    assert practice.startswith("Focus on these keys: x a")
    trainer.start(practice)
    assert trainer.state is SessionState.RUNNING
    assert trainer.session.expected_text == practice


def test_init_services(tmp_path) -> None:
    db_manager, history_manager, service = init_services(str(tmp_path / "trainer.db"), capacity=3)
    try:
        assert history_manager.capacity == 3
        assert service.history_manager is history_manager
        assert history_manager.db_manager is db_manager
    finally:
        db_manager.close()


def test_report_survives_failed_history_save(caplog) -> None:
    service = TrainerService(HistoryManager(ReadOnlyStore()), clock=lambda: at(5_000))
    service.start("ab")
    service.on_input("a", at(0))
    with caplog.at_level("ERROR"):
        report = service.on_input("ax", at(200))
    assert report is not None
    assert service.last_report is report
    assert service.state is SessionState.FINISHED
    assert "Error saving session result" in caplog.text

    service.start("abc")
    report = service.finish()
    assert report is not None
    assert service.last_report is report
