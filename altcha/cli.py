"""
Command line entry point.

Usage:
    altcha create --param form=signup > challenge.json
    altcha solve < challenge.json > payload.txt
    altcha verify < payload.txt

The HMAC key is read from ALTCHA_HMAC_KEY unless --hmac-key is given.
"""

import argparse
import sys

from pydantic import ValidationError

from altcha.config import settings
from altcha.exceptions import AltchaError
from altcha.logging_config import get_logger, setup_logging
from altcha.schemas import Algorithm, Challenge, Payload
from altcha.services.pow_service import create_challenge, solve_challenge, verify_solution

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_USAGE = 2


def _parse_param(value: str) -> tuple[str, str]:
    key, sep, val = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got {value!r}")
    return key, val


def _read_input(value: str | None) -> str:
    if value is None or value == "-":
        return sys.stdin.read()
    return value


def cmd_create(args: argparse.Namespace) -> int:
    overrides = {}
    if args.hmac_key is not None:
        overrides["hmac_key"] = args.hmac_key
    if args.algorithm is not None:
        overrides["algorithm"] = Algorithm(args.algorithm)
    if args.max_number is not None:
        overrides["max_number"] = args.max_number
    if args.params:
        overrides["params"] = dict(args.params)

    options = settings.challenge_options(**overrides)
    if args.no_expires:
        options = options.model_copy(update={"expires": None})

    challenge = create_challenge(options)
    print(challenge.to_json())
    return EXIT_OK


def cmd_solve(args: argparse.Namespace) -> int:
    challenge = Challenge.model_validate_json(_read_input(args.challenge))
    solution = solve_challenge(
        challenge.challenge,
        challenge.salt,
        challenge.algorithm,
        challenge.max_number,
        args.start,
    )
    if solution is None:
        get_logger(__name__).warning("challenge_unsolved", max_number=challenge.max_number)
        return EXIT_REJECTED

    get_logger(__name__).info("challenge_solved", took_ms=round(solution.took, 2))
    print(Payload.from_challenge(challenge, solution.number).to_base64())
    return EXIT_OK


def cmd_verify(args: argparse.Namespace) -> int:
    hmac_key = args.hmac_key if args.hmac_key is not None else settings.hmac_key
    if not hmac_key:
        raise AltchaError("hmac key is not configured (set ALTCHA_HMAC_KEY or --hmac-key)")

    verified = verify_solution(
        _read_input(args.payload).strip(),
        hmac_key,
        check_expires=not args.no_check_expires,
    )
    print("verified" if verified else "rejected")
    return EXIT_OK if verified else EXIT_REJECTED


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="altcha", description="Proof-of-work challenges")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create = subparsers.add_parser("create", help="Issue a signed challenge (JSON)")
    create.add_argument("--hmac-key", help="Shared secret (default: ALTCHA_HMAC_KEY)")
    create.add_argument("--algorithm", choices=[a.value for a in Algorithm])
    create.add_argument("--max-number", type=int)
    create.add_argument(
        "--param",
        dest="params",
        action="append",
        type=_parse_param,
        metavar="KEY=VALUE",
        help="Extra salt parameter (repeatable)",
    )
    create.add_argument("--no-expires", action="store_true", help="Issue without expiry")
    create.set_defaults(func=cmd_create)

    solve = subparsers.add_parser("solve", help="Solve a challenge, print base64 payload")
    solve.add_argument("challenge", nargs="?", help="Challenge JSON (default: stdin)")
    solve.add_argument("--start", type=int, default=0)
    solve.set_defaults(func=cmd_solve)

    verify = subparsers.add_parser("verify", help="Verify a payload")
    verify.add_argument("payload", nargs="?", help="Payload JSON or base64 (default: stdin)")
    verify.add_argument("--hmac-key", help="Shared secret (default: ALTCHA_HMAC_KEY)")
    verify.add_argument("--no-check-expires", action="store_true")
    verify.set_defaults(func=cmd_verify)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging()

    try:
        return args.func(args)
    except (AltchaError, ValidationError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
