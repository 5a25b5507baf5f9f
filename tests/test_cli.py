"""Tests for the typer CLI (cli.main, cli.doctor)."""

from __future__ import annotations

import json

import pytest
from rich.console import Console
from typer.testing import CliRunner

import cli.doctor as doctor
import cli.main as cli_main
import core.config as config

runner = CliRunner()

MODELS = {
    "models": [
        {
            "name": "en-US_BroadbandModel",
            "language": "en-US",
            "rate": 16000,
            "url": "https://host/v1/models/en-US_BroadbandModel",
            "supported_features": {"custom_language_model": True, "speaker_labels": True},
            "description": "US English broadband model.",
        }
    ]
}


@pytest.fixture(autouse=True)
def _wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_main, "_console", Console(width=200))
    monkeypatch.setattr(doctor, "_console", Console(width=200))


@pytest.fixture
def cli_stt(monkeypatch: pytest.MonkeyPatch, stt):
    monkeypatch.setattr(cli_main, "build_service", lambda: stt)
    return stt


def test_models_list_renders_table(recorder, cli_stt) -> None:
    recorder.queue(200, MODELS)
    result = runner.invoke(cli_main.app, ["models", "list"])
    assert result.exit_code == 0, result.output
    assert "en-US_BroadbandModel" in result.output
    assert "Base Models" in result.output


def test_json_flag_prints_raw_result(recorder, cli_stt) -> None:
    recorder.queue(200, MODELS)
    result = runner.invoke(cli_main.app, ["--json", "models", "list"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["models"][0]["rate"] == 16000


def test_recognize_prints_transcript(recorder, cli_stt, tmp_path) -> None:
    audio = tmp_path / "call.wav"
    audio.write_bytes(b"RIFF0000WAVE")
    recorder.queue(200, {"results": [{"final": True, "alternatives": [{"transcript": "good morning"}]}]})

    result = runner.invoke(
        cli_main.app,
        ["recognize", str(audio), "-c", "audio/wav", "-k", "morning", "-k", "night", "--timestamps"],
    )

    assert result.exit_code == 0, result.output
    assert "good morning" in result.output
    assert recorder.last.url.params["keywords"] == "morning,night"
    assert recorder.last.url.params["timestamps"] == "true"
    assert recorder.bodies[-1] == b"RIFF0000WAVE"


def test_service_error_exits_with_code_1(recorder, cli_stt) -> None:
    recorder.queue(404, {"error": "Model not found"})
    result = runner.invoke(cli_main.app, ["models", "get", "xx-XX_Nope"])
    assert result.exit_code == 1
    assert "Model not found" in result.output


def test_invalid_settings_exit_cleanly(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SPEECH_TO_TEXT_HTTP_TIMEOUT_SECONDS", "0")
    result = runner.invoke(cli_main.app, ["models", "list"])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
    assert "Traceback" not in result.output


def test_output_option_writes_result_file(recorder, cli_stt, tmp_path) -> None:
    recorder.queue(200, MODELS)
    out = tmp_path / "exports" / "models.json"
    result = runner.invoke(cli_main.app, ["--output", str(out), "models", "list"])
    assert result.exit_code == 0, result.output
    assert "Base Models" in result.output
    saved = json.loads(out.read_text(encoding="utf-8"))
    assert saved["models"][0]["name"] == "en-US_BroadbandModel"


def test_output_option_keeps_json_stdout_clean(recorder, cli_stt, tmp_path) -> None:
    recorder.queue(200, MODELS)
    out = tmp_path / "models.json"
    result = runner.invoke(cli_main.app, ["--json", "-o", str(out), "models", "list"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == json.loads(out.read_text(encoding="utf-8"))


def test_words_add_single_word_uses_put(recorder, cli_stt) -> None:
    recorder.queue(201, b"")
    result = runner.invoke(
        cli_main.app, ["words", "add", "cid", "IEEE", "--sounds-like", "I triple E"]
    )
    assert result.exit_code == 0, result.output
    assert recorder.last.method == "PUT"
    assert recorder.bodies[-1] == b'{"sounds_like":["I triple E"]}'


def test_words_add_many_words_uses_post(recorder, cli_stt) -> None:
    recorder.queue(201, b"")
    result = runner.invoke(cli_main.app, ["words", "add", "cid", "tomato", "potato"])
    assert result.exit_code == 0, result.output
    assert recorder.last.method == "POST"
    assert json.loads(recorder.bodies[-1]) == {"words": [{"word": "tomato"}, {"word": "potato"}]}


def test_user_data_delete_requires_confirmation(recorder, cli_stt) -> None:
    aborted = runner.invoke(cli_main.app, ["user-data", "delete", "cust-1"], input="n\n")
    assert aborted.exit_code == 1
    assert recorder.calls == 0

    recorder.queue(200, b"")
    result = runner.invoke(cli_main.app, ["user-data", "delete", "cust-1", "--yes"])
    assert result.exit_code == 0, result.output
    assert recorder.last.url.params["customer_id"] == "cust-1"


def test_doctor_run_reports_connectivity(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SPEECH_TO_TEXT_IAM_APIKEY", "k")
    monkeypatch.setattr(doctor, "_check_service", lambda settings: (True, "HTTP 200, 3 models"))
    result = runner.invoke(cli_main.app, ["doctor", "run"])
    assert result.exit_code == 0, result.output
    assert "auth: iam" in result.output
    assert "3 models" in result.output


def test_doctor_run_fails_when_service_unreachable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(doctor, "_check_service", lambda settings: (False, "connection refused"))
    result = runner.invoke(cli_main.app, ["doctor", "run"])
    assert result.exit_code == 1
    assert "FAIL" in result.output


def test_doctor_setup_writes_user_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setattr(config, "get_user_config_dir", lambda: tmp_path / "cfg")
    result = runner.invoke(
        cli_main.app,
        ["doctor", "setup"],
        input="https://gateway.example/api\nbasic\nalice\npw\n",
    )
    assert result.exit_code == 0, result.output
    text = (tmp_path / "cfg" / ".env").read_text(encoding="utf-8")
    assert "SPEECH_TO_TEXT_URL=https://gateway.example/api" in text
    assert "SPEECH_TO_TEXT_USERNAME=alice" in text
    assert "SPEECH_TO_TEXT_PASSWORD=pw" in text
