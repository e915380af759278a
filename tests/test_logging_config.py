import logging

from plantbuilder.logging_config import configure_logging


def test_explicit_level_wins(monkeypatch):
    monkeypatch.setenv("PLANTBUILDER_LOG_LEVEL", "ERROR")

    assert configure_logging("debug") == "DEBUG"
    assert logging.getLogger("plantbuilder").level == logging.DEBUG
    assert logging.getLogger("uvicorn").level == logging.DEBUG


def test_level_falls_back_to_environment_then_info(monkeypatch):
    monkeypatch.setenv("PLANTBUILDER_LOG_LEVEL", "warning")
    assert configure_logging() == "WARNING"

    monkeypatch.delenv("PLANTBUILDER_LOG_LEVEL")
    assert configure_logging() == "INFO"
    assert logging.getLogger("plantbuilder").level == logging.INFO
