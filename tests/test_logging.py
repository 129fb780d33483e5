"""
Tests for logging configuration module.
"""

import logging

from upstream_pins.logging_config import PinCheckFormatter, setup_logging


def make_record(level=logging.INFO, name="upstream_pins.checker", thread="upstream-zlib"):
    record = logging.LogRecord(
        name=name,
        level=level,
        pathname="",
        lineno=0,
        msg="Fetching zlib",
        args=(),
        exc_info=None,
    )
    record.threadName = thread
    return record


class TestSetupLogging:
    """Test logging setup and configuration."""

    def test_setup_logging_default(self):
        """Test default logging setup."""
        logger = setup_logging()
        assert logger.name == "upstream_pins"
        assert logger.level == logging.INFO
        assert logger.propagate is False

    def test_setup_logging_verbose(self):
        """Test verbose logging enables DEBUG level."""
        logger = setup_logging(level="WARNING", verbose=True)
        assert logger.level == logging.DEBUG

    def test_setup_logging_replaces_handlers(self):
        """Test repeated setup does not stack console handlers."""
        setup_logging()
        logger = setup_logging(level="DEBUG")
        assert len(logger.handlers) == 1

    def test_console_goes_to_stderr(self, capsys):
        """Test console logs leave stdout free for the report."""
        logger = setup_logging()
        logging.getLogger("upstream_pins.changelog").info("Changelog updated: CHANGELOG.md")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Changelog updated: CHANGELOG.md" in captured.err

    def test_debug_hidden_at_info(self, capsys):
        """Test per-item fetch chatter is hidden by default."""
        setup_logging()
        logging.getLogger("upstream_pins.checker").debug("Fetching zlib")
        assert capsys.readouterr().err == ""

    def test_log_file_gets_debug(self, tmp_path, capsys):
        """Test the log file records DEBUG while the console stays at INFO."""
        log_file = tmp_path / "logs" / "check.log"
        logger = setup_logging(log_file=str(log_file))
        logging.getLogger("upstream_pins.checker").debug("Fetching zlib")
        for handler in logger.handlers:
            handler.flush()

        assert "Fetching zlib" in log_file.read_text()
        assert "Fetching zlib" not in capsys.readouterr().err

        setup_logging()  # closes the file handler


class TestPinCheckFormatter:
    """Test the console formatter."""

    def test_info_is_bare(self):
        """Test INFO messages carry no prefix."""
        formatter = PinCheckFormatter(use_colors=False)
        assert formatter.format(make_record()) == "Fetching zlib"

    def test_error_prefix(self):
        """Test errors are prefixed with the program name and level."""
        formatter = PinCheckFormatter(use_colors=False)
        assert formatter.format(make_record(logging.ERROR)) == "check_updates: error: Fetching zlib"

    def test_debug_names_module_and_thread(self):
        """Test debug lines show which fetch thread logged them."""
        formatter = PinCheckFormatter(use_colors=False)
        assert formatter.format(make_record(logging.DEBUG)) == (
            "check_updates: debug: [checker/upstream-zlib] Fetching zlib"
        )

    def test_colors(self):
        """Test terminal output colors the level label."""
        formatter = PinCheckFormatter(use_colors=True)
        formatted = formatter.format(make_record(logging.WARNING))
        assert "\033[33mwarning\033[0m" in formatted
