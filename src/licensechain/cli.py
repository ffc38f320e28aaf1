"""LicenseChain CLI - webhook signature tools and license checks.

Usage:
    python -m licensechain webhook sign [--secret S] [--input PATH]
    python -m licensechain webhook verify --signature SIG [--secret S] [--input PATH]
    python -m licensechain license validate KEY

The webhook secret is read from LICENSECHAIN_WEBHOOK_SECRET when --secret is
omitted. Payloads are read from --input or stdin as raw bytes. API commands use
the LICENSECHAIN_* environment configuration (see licensechain.config).

Exit codes:
    0: Success / signature valid / license valid
    1: Error (bad input, configuration or API failure)
    2: Signature invalid / license invalid
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Any, Final

from licensechain.errors import LicenseChainError
from licensechain.webhooks.signing import sign, verify

ENV_WEBHOOK_SECRET: Final[str] = "LICENSECHAIN_WEBHOOK_SECRET"


def _output_json(data: dict[str, Any]) -> None:
    """Output JSON to stdout with deterministic ordering."""
    print(json.dumps(data, sort_keys=True, indent=2))


def _error(code: str, message: str) -> int:
    _output_json({"error": {"code": code, "message": message}})
    return 1


def _read_payload(input_path: str | None) -> bytes:
    """Read the raw payload from a file or stdin, without decoding."""
    if input_path:
        with open(input_path, "rb") as f:
            return f.read()
    return sys.stdin.buffer.read()


def _resolve_secret(args: argparse.Namespace) -> str | None:
    return args.secret or os.environ.get(ENV_WEBHOOK_SECRET) or None


def cmd_webhook_sign(args: argparse.Namespace) -> int:
    secret = _resolve_secret(args)
    if secret is None:
        return _error("MISSING_SECRET", f"Pass --secret or set {ENV_WEBHOOK_SECRET}")
    try:
        payload = _read_payload(args.input)
    except OSError as e:
        return _error("INVALID_INPUT", f"Cannot read input: {e}")

    _output_json({"signature": sign(payload, secret)})
    return 0


def cmd_webhook_verify(args: argparse.Namespace) -> int:
    """Verify a payload signature.

    Exit codes:
        0: valid
        2: invalid
    """
    secret = _resolve_secret(args)
    if secret is None:
        return _error("MISSING_SECRET", f"Pass --secret or set {ENV_WEBHOOK_SECRET}")
    try:
        payload = _read_payload(args.input)
    except OSError as e:
        return _error("INVALID_INPUT", f"Cannot read input: {e}")

    valid = verify(payload, args.signature, secret)
    _output_json({"valid": valid})
    return 0 if valid else 2


def cmd_license_validate(args: argparse.Namespace) -> int:
    from licensechain.client import LicenseChainClient

    try:
        with LicenseChainClient() as client:
            valid = client.licenses.validate(args.key)
    except LicenseChainError as e:
        return _error(e.error_code, e.message)

    _output_json({"valid": valid})
    return 0 if valid else 2


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="licensechain",
        description="LicenseChain SDK command-line tools",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    webhook_parser = subparsers.add_parser("webhook", help="Webhook signature tools")
    webhook_subparsers = webhook_parser.add_subparsers(
        dest="webhook_command",
        help="Webhook subcommands",
    )

    sign_parser = webhook_subparsers.add_parser("sign", help="Sign a payload")
    verify_parser = webhook_subparsers.add_parser("verify", help="Verify a payload signature")
    verify_parser.add_argument(
        "--signature",
        required=True,
        help="Hex signature from the X-LicenseChain-Signature header",
    )
    for sub in (sign_parser, verify_parser):
        sub.add_argument(
            "--secret",
            default=None,
            help=f"Webhook secret (default: ${ENV_WEBHOOK_SECRET})",
        )
        sub.add_argument(
            "--input",
            default=None,
            metavar="PATH",
            help="Path to payload file (reads stdin if omitted)",
        )

    license_parser = subparsers.add_parser("license", help="License operations")
    license_subparsers = license_parser.add_subparsers(
        dest="license_command",
        help="License subcommands",
    )
    validate_parser = license_subparsers.add_parser(
        "validate",
        help="Check a license key against the API",
    )
    validate_parser.add_argument("key", help="License key")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Exit codes:
        0: Success
        1: Error
        2: Invalid signature / invalid license
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command == "webhook":
        if args.webhook_command == "sign":
            return cmd_webhook_sign(args)
        if args.webhook_command == "verify":
            return cmd_webhook_verify(args)
        parser.parse_args(["webhook", "--help"])
        return 0

    if args.command == "license":
        if args.license_command == "validate":
            return cmd_license_validate(args)
        parser.parse_args(["license", "--help"])
        return 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
