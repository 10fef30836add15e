"""Tests for the environment validation and drift detection script."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from scripts import check_env


def _write_env(env_path: Path, **values: str) -> None:
    contents = "\n".join(f"{key}={value}" for key, value in values.items())
    env_path.write_text(contents + "\n", encoding="utf-8")


@pytest.fixture(autouse=True)
def isolated_environ(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep values loaded from temporary .env files out of the real environment."""
    environ = {
        key: value
        for key, value in os.environ.items()
        if not key.startswith(("INTRO_", "CHAT_", "GEMINI_", "UPLOAD_", "SME_"))
    }
    monkeypatch.setattr(os, "environ", environ)


@pytest.mark.parametrize("command", ["record", "verify", "check"])
def test_main_requires_existing_env_file(tmp_path: Path, command: str) -> None:
    env_file = tmp_path / ".missing-env"
    hash_file = tmp_path / ".env.sha256"

    argv = [command, "--env-file", str(env_file)]
    if command != "check":
        argv.extend(["--hash-file", str(hash_file)])

    exit_code = check_env.main(argv)
    assert exit_code == check_env.EXIT_RUNTIME_ERROR


def test_check_reports_resolved_settings(tmp_path: Path, capsys) -> None:
    env_file = tmp_path / ".env"
    _write_env(
        env_file,
        SME_BACKEND_URL="https://analysis.example.com/",
        UPLOAD_ALLOWED_EXTENSIONS="csv, .XLSX",
    )

    exit_code = check_env.main(["check", "--env-file", str(env_file)])

    assert exit_code == check_env.EXIT_OK
    output = capsys.readouterr().out
    assert "https://analysis.example.com" in output
    assert "csv, xlsx" in output


def test_record_and_verify_detects_mismatched_checksum(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    hash_file = tmp_path / ".env.sha256"
    _write_env(env_file, SME_BACKEND_URL="https://analysis.example.com")

    exit_code = check_env.main(
        ["record", "--env-file", str(env_file), "--hash-file", str(hash_file)]
    )
    assert exit_code == check_env.EXIT_OK
    assert hash_file.read_text(encoding="utf-8").strip()

    exit_code = check_env.main(
        ["verify", "--env-file", str(env_file), "--hash-file", str(hash_file)]
    )
    assert exit_code == check_env.EXIT_OK

    _write_env(env_file, SME_BACKEND_URL="https://elsewhere.example.com")

    exit_code = check_env.main(
        ["verify", "--env-file", str(env_file), "--hash-file", str(hash_file)]
    )
    assert exit_code == check_env.EXIT_CHECKSUM_ERROR


def test_verify_without_baseline_is_runtime_error(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    _write_env(env_file, APP_ENV="production")

    exit_code = check_env.main(
        [
            "verify",
            "--env-file",
            str(env_file),
            "--hash-file",
            str(tmp_path / "absent.sha256"),
        ]
    )
    assert exit_code == check_env.EXIT_RUNTIME_ERROR


def test_invalid_value_fails_validation(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    _write_env(env_file, INTRO_EXPAND_DELAY_MS="soon")

    exit_code = check_env.main(["check", "--env-file", str(env_file)])
    assert exit_code == check_env.EXIT_VALIDATION_ERROR


def test_inverted_intro_delays_fail_validation(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    _write_env(env_file, INTRO_EXPAND_DELAY_MS="5000", INTRO_MAIN_DELAY_MS="1000")

    exit_code = check_env.main(["check", "--env-file", str(env_file)])
    assert exit_code == check_env.EXIT_VALIDATION_ERROR


def test_gemini_assistant_requires_api_key(tmp_path: Path) -> None:
    env_file = tmp_path / ".env"
    _write_env(env_file, CHAT_REPLY_STRATEGY="gemini")

    exit_code = check_env.main(["check", "--env-file", str(env_file)])
    assert exit_code == check_env.EXIT_VALIDATION_ERROR

    _write_env(env_file, CHAT_REPLY_STRATEGY="gemini", GEMINI_API_KEY="key")
    os.environ.pop("CHAT_REPLY_STRATEGY", None)

    exit_code = check_env.main(["check", "--env-file", str(env_file)])
    assert exit_code == check_env.EXIT_OK
