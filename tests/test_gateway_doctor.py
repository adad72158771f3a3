"""Tests for the gateway configuration doctor."""

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from superstudy.gateway.doctor import check_config, main, print_report


@patch.dict("os.environ", {"OPENAI_API_KEY": "sk"}, clear=True)
def test_check_default_config():
    """Test missing keys are warnings, not errors."""
    result = check_config(None)

    assert result["valid"]
    assert result["providers"]["openai"]["key_set"]
    assert not result["providers"]["anthropic"]["key_set"]
    assert "anthropic: Environment variable ANTHROPIC_API_KEY is not set" in result["warnings"]


def test_check_missing_file():
    result = check_config("/nonexistent/gateway.yaml")
    assert not result["valid"]
    assert "Configuration file not found" in result["errors"][0]


def test_check_invalid_config():
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        yaml.dump({"gateway": {"providers": {"bogus": {}}}}, f)
        path = Path(f.name)
    try:
        result = check_config(str(path))
        assert not result["valid"]
        assert "Unknown AI provider 'bogus'" in result["errors"][0]
    finally:
        path.unlink()


def test_temperature_warning():
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        yaml.dump({"gateway": {"temperature": 1.5}}, f)
        path = Path(f.name)
    try:
        result = check_config(str(path))
        assert result["valid"]
        assert any("outside normal range" in w for w in result["warnings"])
    finally:
        path.unlink()


@patch.dict("os.environ", {}, clear=True)
def test_print_report(capsys):
    print_report(None, check_config(None))
    out = capsys.readouterr().out
    assert "(built-in defaults)" in out
    assert "openrouter -> openai/gpt-4o-mini" in out
    assert "Status: ✓ VALID" in out


@patch("superstudy.gateway.doctor.load_dotenv")
def test_main_exit_codes(mock_load_dotenv):
    with patch("sys.argv", ["doctor"]):
        with pytest.raises(SystemExit) as exc:
            main()
    assert exc.value.code == 0

    with patch("sys.argv", ["doctor", "--config", "/nonexistent/gateway.yaml"]):
        with pytest.raises(SystemExit) as exc:
            main()
    assert exc.value.code == 1


@patch("superstudy.gateway.doctor.load_dotenv")
def test_main_list_static_models(mock_load_dotenv, capsys):
    with patch("sys.argv", ["doctor", "--list-models", "anthropic"]):
        with pytest.raises(SystemExit) as exc:
            main()
    assert exc.value.code == 0
    assert "claude-3-5-haiku-20241022" in capsys.readouterr().out
