"""
Tests for the console prompt and progress reporter.
"""

from unittest.mock import patch

from rustupkit.core.console import (
    AutoConsentPrompt,
    ConsolePrompt,
    ConsoleProgressReporter,
)


class TestConsolePrompt:
    """Test ConsolePrompt."""

    @patch("builtins.input", return_value="y")
    def test_short_yes(self, mock_input):
        """Test 'y' maps to the affirmative label."""
        assert ConsolePrompt().ask("Install?", "Yes") == "Yes"
        assert "[Yes/no]" in mock_input.call_args[0][0]

    @patch("builtins.input", return_value="YES")
    def test_label_case_insensitive(self, mock_input):
        assert ConsolePrompt().ask("Install?", "Yes") == "Yes"

    @patch("builtins.input", return_value="no")
    def test_no(self, mock_input):
        assert ConsolePrompt().ask("Install?", "Yes") == "no"

    @patch("builtins.input", return_value="")
    def test_empty_answer_is_dismissed(self, mock_input):
        assert ConsolePrompt().ask("Install?", "Yes") is None

    @patch("builtins.input", side_effect=EOFError)
    def test_no_terminal(self, mock_input):
        assert ConsolePrompt().ask("Install?", "Yes") is None

    def test_show_error_goes_to_stderr(self, capsys):
        ConsolePrompt().show_error("Rustup not available")

        captured = capsys.readouterr()
        assert "Rustup not available" in captured.err
        assert captured.out == ""


class TestAutoConsentPrompt:
    """Test AutoConsentPrompt."""

    @patch("builtins.input")
    def test_accepts_without_asking(self, mock_input, capsys):
        assert AutoConsentPrompt().ask("RLS not installed. Install?", "Yes") == "Yes"
        mock_input.assert_not_called()
        assert "RLS not installed" in capsys.readouterr().out


class TestConsoleProgressReporter:
    """Test ConsoleProgressReporter."""

    def test_prints_messages(self, capsys):
        reporter = ConsoleProgressReporter()
        reporter.start("Updating RLS...")
        reporter.stop("Up to date.")

        out = capsys.readouterr().out
        assert "Updating RLS..." in out
        assert "Up to date." in out

    def test_quiet(self, capsys):
        reporter = ConsoleProgressReporter(quiet=True)
        reporter.start("Updating RLS...")
        reporter.stop("Up to date.")

        assert capsys.readouterr().out == ""
