#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import argparse
try:
    import argcomplete
except ImportError:
    argcomplete = None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cognitosrp", description="Cognito SRP-6a client values")
    parser.add_argument("-c", "--config", type=str, help="YAML file merged over the packaged configuration")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging output")
    parser.add_argument("-s", "--silent", action="store_true", help="Run silently (no logs)")

    commands = parser.add_subparsers(dest="command", required=True)

    initiate = commands.add_parser("initiate", help="Generate A and print the initiate-auth parameters")
    initiate.add_argument("-u", "--username", type=str, required=True, help="Username")
    initiate.add_argument("--pool-id", type=str, help="User pool id, e.g. eu-west-1_AbCdEfGhI")

    respond = commands.add_parser("respond", help="Answer a PASSWORD_VERIFIER challenge")
    respond.add_argument("-u", "--username", type=str, required=True, help="Username")
    respond.add_argument("--pool-id", type=str, help="User pool id, e.g. eu-west-1_AbCdEfGhI")
    respond.add_argument("--challenge", type=str, required=True, help="JSON file with the ChallengeParameters")
    respond.add_argument("--private-exponent", type=str, required=True, help="Hex private exponent printed by 'initiate'")
    respond.add_argument("--password", type=str, help="Password (prompted when omitted)")

    return parser


def parse_args(argv=None):
    parser = build_parser()
    if argcomplete is not None:
        argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
