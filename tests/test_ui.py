"""Tests for UI modules."""

import io
import logging

from rich.console import Console


class TestSimpleRichUI:
    """Tests for the progress bar UI."""

    def test_disabled_when_not_terminal(self):
        """Test progress is off when output is not a terminal."""
        from hardsub.ui.simple_rich import SimpleRichUI

        ui = SimpleRichUI(progress_enabled=True, console=Console(file=io.StringIO(), force_terminal=False))
        assert ui.enabled is False

    def test_disabled_by_option(self):
        """Test progress_enabled=False wins over a terminal."""
        from hardsub.ui.simple_rich import SimpleRichUI

        ui = SimpleRichUI(progress_enabled=False, console=Console(file=io.StringIO(), force_terminal=True))
        assert ui.enabled is False

    def test_enabled_on_terminal(self):
        """Test progress is on for a terminal."""
        from hardsub.ui.simple_rich import SimpleRichUI

        ui = SimpleRichUI(progress_enabled=True, console=Console(file=io.StringIO(), force_terminal=True))
        assert ui.enabled is True

    def test_progress_bar_updates(self):
        """Test the yielded function accepts absolute seconds."""
        from hardsub.ui.simple_rich import SimpleRichUI

        out = io.StringIO()
        ui = SimpleRichUI(console=Console(file=out, force_terminal=True, width=120))

        with ui.progress_bar(1420) as set_completed:
            set_completed(60)
            set_completed(1420)

        assert "Processing video..." in out.getvalue()

    def test_unknown_duration(self):
        """Test a total of 0 is accepted."""
        from hardsub.ui.simple_rich import SimpleRichUI

        ui = SimpleRichUI(console=Console(file=io.StringIO(), force_terminal=False))

        with ui.progress_bar(0) as set_completed:
            set_completed(5)


class TestSetupLogging:
    """Tests for logging setup."""

    def test_rich_handler_attached(self):
        """Test a single RichHandler is attached to the package logger."""
        from rich.logging import RichHandler

        from hardsub.ui import setup_logging

        setup_logging()
        setup_logging()

        package_logger = logging.getLogger("hardsub")
        assert len(package_logger.handlers) == 1
        assert isinstance(package_logger.handlers[0], RichHandler)
        assert package_logger.level == logging.INFO

    def test_debug_level(self):
        """Test debug mode lowers the level."""
        from hardsub.ui import setup_logging

        setup_logging(debug=True)
        assert logging.getLogger("hardsub").level == logging.DEBUG
        setup_logging(debug=False)
