from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from providerlock.__main__ import _print_startup_error, main


@pytest.mark.unit
class TestMain:
    """Tests for main() entry point function."""

    @pytest.mark.parametrize(
        "exit_code",
        [0, 1, 130],
        ids=["success", "error", "interrupted"],
    )
    def test_main_returns_cli_exit_code(self, exit_code: int) -> None:
        """Test main returns exit code from cli_main when import succeeds."""
        mock_cli_module = MagicMock()
        mock_cli_module.main = MagicMock(return_value=exit_code)

        with patch.dict("sys.modules", {"providerlock.cli": mock_cli_module}):
            result = main()

        assert result == exit_code
        mock_cli_module.main.assert_called_once_with()

    def test_main_import_error_returns_one(self, capsys: pytest.CaptureFixture) -> None:
        """Test main returns 1 when the cli module cannot be imported."""
        with patch.dict("sys.modules", {"providerlock.cli": None}):
            result = main()

        assert result == 1
        captured = capsys.readouterr()
        assert "providerlock CLI could not be loaded." in captured.err
        assert "ImportError:" in captured.err


@pytest.mark.unit
class TestPrintStartupError:
    """Tests for _print_startup_error helper function."""

    def test_includes_python_version_and_error(
        self, capsys: pytest.CaptureFixture
    ) -> None:
        _print_startup_error(ImportError("Test error message"))

        captured = capsys.readouterr()
        assert "Python version :" in captured.err
        assert "ImportError: Test error message" in captured.err
        assert captured.out == ""
