"""
Tests for the progress display and logging setup.
"""

import io
import logging

from rich.console import Console
from rich.logging import RichHandler

from wavu.core.observability.logging_config import resolve_level, setup_logging
from wavu.ui.progress import ProgressDisplay


class TestProgressDisplay:
    def test_disabled_still_records(self):
        display = ProgressDisplay(enabled=False)
        with display:
            handle = display.add("wasmer")
            handle.set_message("Downloading wasmer")
            handle.finish("Installed wasmer")

        assert handle.messages == ["Downloading wasmer", "Installed wasmer"]
        assert handle.finished
        assert not handle.failed

    def test_fail(self):
        handle = ProgressDisplay(enabled=False).add("wasmtime")
        handle.fail("Failed to download wasmtime: HTTP 500")
        assert handle.failed and handle.finished
        assert handle.message.endswith("HTTP 500")

    def test_show_bytes_is_not_a_message(self):
        handle = ProgressDisplay(enabled=False).add("wasmer")
        handle.set_message("Downloading wasmer: getting http://h/x")
        handle.show_bytes(8192, 20000)
        handle.show_bytes(20000, 20000)
        assert handle.bytes_downloaded == 20000
        assert handle.messages == ["Downloading wasmer: getting http://h/x"]

    def test_message_with_markup_chars(self):
        handle = ProgressDisplay(enabled=False).add("x")
        handle.set_message("getting [not markup]")
        assert handle.message == "getting [not markup]"

    def test_println_enabled(self):
        buf = io.StringIO()
        display = ProgressDisplay(console=Console(file=buf, force_terminal=False), enabled=True)
        with display:
            display.println("Starting downloading runtimes!")
        assert "Starting downloading runtimes!" in buf.getvalue()

    def test_println_disabled(self):
        buf = io.StringIO()
        display = ProgressDisplay(console=Console(file=buf), enabled=False)
        with display:
            display.println("hidden")
        assert "hidden" not in buf.getvalue()


class TestLogging:
    def test_resolve_level_precedence(self):
        assert resolve_level(debug=True, verbose=True) == "DEBUG"
        assert resolve_level(verbose=True, env_level="ERROR") == "INFO"
        assert resolve_level(quiet=True) == "ERROR"
        assert resolve_level(env_level="INFO") == "INFO"
        assert resolve_level() == "WARNING"

    def test_setup_logging_levels(self, tmp_path):
        log_file = tmp_path / "wavu.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        try:
            assert root.level == logging.DEBUG
            logging.getLogger("wavu.test").debug("into the file only")
            for handler in root.handlers:
                handler.flush()
            assert "into the file only" in log_file.read_text()
        finally:
            for handler in list(root.handlers):
                handler.close()
                root.removeHandler(handler)

    def test_logs_share_the_display_console(self):
        buf = io.StringIO()
        console = Console(file=buf, width=200)
        setup_logging("INFO", console=console)
        root = logging.getLogger()
        try:
            assert any(isinstance(h, RichHandler) and h.console is console for h in root.handlers)
            display = ProgressDisplay(console=console, enabled=True)
            with display:
                display.add("wasmer").set_message("Downloading wasmer")
                logging.getLogger("wavu.test").info("above the spinners")
            assert "above the spinners" in buf.getvalue()
        finally:
            root.handlers.clear()

    def test_bad_level_falls_back(self):
        setup_logging("LOUD")
        try:
            assert logging.getLogger().level == logging.WARNING
        finally:
            logging.getLogger().handlers.clear()
