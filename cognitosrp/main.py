#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import getpass
import json
import os
import sys

from cognitosrp.crypto.BigIntCodec import hex_to_bytes
from cognitosrp.crypto.CognitoSRP import EPHEMERAL_BYTES, CognitoSRP, user_pool_name_from_id
from cognitosrp.crypto.Errors import InvalidInputError, SRPError
from cognitosrp.utils.CliArgs import parse_args
from cognitosrp.utils.ConfigLoader import ConfigLoader
from cognitosrp.utils.Logger import Logger


def _resolve_pool_name(args, config: dict) -> str:
    pool_id = args.pool_id or config.get("cognito", {}).get("user_pool_id")
    if not pool_id:
        raise InvalidInputError("No user pool id given (--pool-id or cognito.user_pool_id)")
    return user_pool_name_from_id(pool_id)


def _fixed_exponent(private_exponent: str):
    """Random source replaying a previously printed private exponent."""
    buffer = hex_to_bytes(private_exponent)
    if len(buffer) != EPHEMERAL_BYTES:
        raise InvalidInputError(f"Private exponent must be {EPHEMERAL_BYTES} bytes of hex")
    return lambda _count: buffer


def _load_challenge(path: str) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as file:
            data = json.load(file)
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidInputError(f"Cannot read challenge file {path}: {e}") from e

    # Accept both the bare parameters and a full RespondToAuthChallenge-style response
    return data.get("ChallengeParameters", data) if isinstance(data, dict) else data


def run_initiate(args, config: dict) -> dict:
    private_exponent = os.urandom(EPHEMERAL_BYTES).hex()
    srp = CognitoSRP(_resolve_pool_name(args, config), random_bytes=_fixed_exponent(private_exponent))
    auth_parameters = srp.build_auth_parameters(args.username)

    Logger.warning("The private exponent is secret; use it only to replay this attempt")
    return {
        "AuthParameters": auth_parameters,
        "PrivateExponent": private_exponent,
    }


def run_respond(args, config: dict) -> dict:
    pool_name = _resolve_pool_name(args, config)
    challenge = _load_challenge(args.challenge)
    password = args.password if args.password is not None else getpass.getpass("Password: ")

    srp = CognitoSRP(pool_name, random_bytes=_fixed_exponent(args.private_exponent))
    srp.generate_client_public_value()
    responses = srp.build_challenge_responses(args.username, password, challenge)

    Logger.success(f"Password claim signed for {args.username}")
    return {"ChallengeResponses": responses}


COMMANDS = {
    "initiate": run_initiate,
    "respond": run_respond,
}


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        config = ConfigLoader.reload_config(overlay=args.config) if args.config else ConfigLoader.get_config()
    except RuntimeError as e:
        Logger.error(str(e))
        return 1

    if args.silent:
        Logger.set_level("NONE")
    elif args.verbose:
        Logger.set_level("ALL")

    Logger.info(f"{config.get('tool_name', 'CognitoSRP')} - {args.command}")

    try:
        result = COMMANDS[args.command](args, config)
    except SRPError as e:
        Logger.error(f"{type(e).__name__}: {e}")
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
