"""
Issue a session token for local development.

    python -m scripts.issue_token u1 Alice --role STUDENT --lifetime 3600

With `--secret` the script runs without a configured JWT_SECRET_KEY.
"""

import argparse
from collections.abc import Sequence
import os

from pydantic import ValidationError

from src.auth.enums import UserRole


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Issue a signed session token.")
    parser.add_argument("user_id")
    parser.add_argument("user_name")
    parser.add_argument(
        "--role",
        type=str.upper,
        choices=sorted(UserRole.values()),
        default=UserRole.STUDENT.value,
    )
    parser.add_argument("--iap", type=int, default=None)
    parser.add_argument(
        "--lifetime",
        type=int,
        default=None,
        help="Lifetime in seconds (defaults to ACCESS_TOKEN_EXPIRE_SECONDS)",
    )
    parser.add_argument(
        "--secret", default=None, help="Signing secret (defaults to JWT_SECRET_KEY)"
    )
    return parser


def issue_token(argv: Sequence[str] | None = None) -> str:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.secret:
        # Settings are loaded on import of the signing modules and need a key
        os.environ.setdefault("JWT_SECRET_KEY", args.secret)

    try:
        from src.auth.security import JWTManager
        from src.main.config import get_settings

        settings = get_settings()
    except ValidationError as exc:
        parser.error(f"invalid settings, pass --secret or set JWT_SECRET_KEY:\n{exc}")

    manager = JWTManager(args.secret or settings.jwt.JWT_SECRET_KEY)
    lifetime = args.lifetime
    if lifetime is None:
        lifetime = settings.jwt.ACCESS_TOKEN_EXPIRE_SECONDS

    return manager.issue(
        args.user_id,
        args.user_name,
        UserRole(args.role),
        args.iap,
        lifetime_seconds=lifetime,
    )


if __name__ == "__main__":
    print(issue_token())
