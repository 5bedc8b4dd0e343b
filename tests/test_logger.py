"""Tests for src.logger: logging setup and the log_function decorator."""

import logging

import pytest

from src.logger import log_function, setup_logging


class TestLogFunction:
    def test_sync_function(self, caplog):
        @log_function(logger_name="test_sync")
        def add(a, b):
            return a + b

        with caplog.at_level(logging.INFO, logger="test_sync"):
            assert add(1, 2) == 3

        messages = [r.getMessage() for r in caplog.records]
        assert messages[0] == "Calling add"
        assert messages[1].startswith("Completed add in ")

    @pytest.mark.asyncio
    async def test_async_function(self, caplog):
        @log_function(logger_name="test_async", log_args=True, log_result=True)
        async def double(value):
            return value * 2

        with caplog.at_level(logging.INFO, logger="test_async"):
            assert await double(4) == 8

        messages = [r.getMessage() for r in caplog.records]
        assert messages[0] == "Calling double with args: 4"
        assert messages[1].endswith("with result: 8")

    @pytest.mark.asyncio
    async def test_exception_logged_and_raised(self, caplog):
        @log_function(logger_name="test_error")
        async def fail():
            raise RuntimeError("boom")

        with caplog.at_level(logging.INFO, logger="test_error"):
            with pytest.raises(RuntimeError):
                await fail()

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert "RuntimeError: boom" in errors[0].getMessage()


class TestSetupLogging:
    def test_creates_log_file_once(self, tmp_path):
        log_file = tmp_path / "logs" / "unit.log"
        logger = setup_logging("unit_test_logger", log_file=str(log_file))
        again = setup_logging("unit_test_logger", log_file=str(log_file))

        logger.info("hello")
        assert logger is again
        assert len(logger.handlers) == 1
        assert "hello" in log_file.read_text(encoding="utf-8")

        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
