"""Verify that the dashboard's environment configuration is usable.

Two checks are available:

1. Load ``AppSettings`` from the given ``.env`` file and apply the dashboard's
   cross-field rules (intro timing order, Gemini key when the Gemini assistant
   is selected).
2. Record or verify a checksum of the ``.env`` file so unexpected edits are
   noticed before the service restarts.

Example usages::

    python -m scripts.check_env check --env-file /srv/sme-vision/.env

    python -m scripts.check_env record --env-file /srv/sme-vision/.env \
        --hash-file /srv/sme-vision/.env.sha256

    python -m scripts.check_env verify --env-file /srv/sme-vision/.env \
        --hash-file /srv/sme-vision/.env.sha256
"""

from __future__ import annotations

import argparse
import hashlib
import sys
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from sme_vision.core.config import AppSettings, _load_env_file

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_CHECKSUM_ERROR = 3
EXIT_RUNTIME_ERROR = 5


class SettingsRuleError(ValueError):
    """Settings parsed but violate a rule spanning several fields."""


def _compute_hash(env_file: Path) -> str:
    return hashlib.sha256(env_file.read_bytes()).hexdigest()


def _check_rules(settings: AppSettings) -> list[str]:
    problems: list[str] = []
    if settings.intro.main_delay_ms <= settings.intro.expand_delay_ms:
        problems.append(
            "INTRO_MAIN_DELAY_MS must be greater than INTRO_EXPAND_DELAY_MS."
        )
    if settings.chat.reply_strategy == "gemini" and not settings.gemini.api_key:
        problems.append("CHAT_REPLY_STRATEGY=gemini requires GEMINI_API_KEY.")
    if not settings.upload.allowed_extensions:
        problems.append("UPLOAD_ALLOWED_EXTENSIONS must list at least one extension.")
    return problems


def _validate_settings(env_file: Path) -> AppSettings:
    """Load settings from ``env_file`` and apply the cross-field rules."""
    _load_env_file(str(env_file))
    settings = AppSettings(_env_file=env_file)
    problems = _check_rules(settings)
    if problems:
        raise SettingsRuleError("\n".join(f"  - {problem}" for problem in problems))
    return settings


def _record_checksum(env_file: Path, hash_file: Path) -> int:
    checksum = _compute_hash(env_file)
    hash_file.write_text(f"{checksum}\n", encoding="utf-8")
    print(f"Recorded checksum to {hash_file} ({checksum})")
    return EXIT_OK


def _verify_checksum(env_file: Path, hash_file: Path) -> int:
    if not hash_file.exists():
        print(
            f"Expected checksum file {hash_file} is missing. "
            "Re-run with the 'record' command to establish a baseline.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    expected = hash_file.read_text(encoding="utf-8").strip()
    actual = _compute_hash(env_file)
    if expected == actual:
        print("Environment checksum OK.")
        return EXIT_OK

    print(
        "Environment checksum mismatch!\n"
        f"  expected: {expected}\n"
        f"  actual:   {actual}\n"
        "Review the change before restarting the dashboard.",
        file=sys.stderr,
    )
    return EXIT_CHECKSUM_ERROR


def _report_settings(settings: AppSettings) -> int:
    print(
        "Settings OK.\n"
        f"  backend:  {settings.backend.base_url}\n"
        f"  uploads:  {', '.join(settings.upload.allowed_extensions)}\n"
        f"  chat:     {settings.chat.reply_strategy}"
    )
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate dashboard settings and detect .env drift."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_env_file(subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument(
            "--env-file",
            default=".env",
            type=Path,
            help="Path to the environment file (default: .env in the repo root).",
        )

    def add_hash_file(subparser: argparse.ArgumentParser, help_text: str) -> None:
        subparser.add_argument("--hash-file", required=True, type=Path, help=help_text)

    record_parser = subparsers.add_parser(
        "record", help="Validate settings and store the checksum baseline."
    )
    add_env_file(record_parser)
    add_hash_file(record_parser, "Location to write the checksum baseline.")

    verify_parser = subparsers.add_parser(
        "verify", help="Validate settings and compare the checksum with the baseline."
    )
    add_env_file(verify_parser)
    add_hash_file(verify_parser, "Location of the recorded checksum baseline.")

    check_parser = subparsers.add_parser(
        "check", help="Validate settings without touching any checksum files."
    )
    add_env_file(check_parser)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    env_file: Path = args.env_file
    if not env_file.exists():
        print(
            f"Environment file {env_file} does not exist. "
            "Ensure the path is correct or create it before running this tool.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    try:
        settings = _validate_settings(env_file)
    except ValidationError as exc:
        print(
            "Settings validation failed. Invalid values detected:\n"
            f"{exc.json(indent=2)}",
            file=sys.stderr,
        )
        return EXIT_VALIDATION_ERROR
    except SettingsRuleError as exc:
        print(f"Settings validation failed:\n{exc}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR
    except Exception as exc:  # pylint: disable=broad-except
        print(f"Unexpected error during validation: {exc}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    handlers: dict[str, Callable[[], int]] = {
        "record": lambda: _record_checksum(env_file, args.hash_file),
        "verify": lambda: _verify_checksum(env_file, args.hash_file),
        "check": lambda: _report_settings(settings),
    }
    return handlers[args.command]()


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
