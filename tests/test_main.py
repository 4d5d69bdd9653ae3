#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Unit tests for the cognitosrp command line."""

from __future__ import annotations

import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

from cognitosrp import main as cli
from cognitosrp.crypto import CognitoSRP as srp_module
from cognitosrp.utils.ConfigLoader import ConfigLoader
from cognitosrp.utils.Logger import Logger

CHALLENGE_2 = {
    "USER_ID_FOR_SRP": "alice",
    "SALT": "9f86d081884c7d659a2feaa0c55ad015",
    "SECRET_BLOCK": "q83vEjRWeJA-_w",
    "SRP_B": "2c3f4e5a6b7c8d9e0f1a2b3c4d5e6f708192a3b4c5d6e7f8091a2b3c4d5e6f7081",
}
EXPECTED_SIGNATURE_2 = "wc57ltwi3CZYQ8zLfaXN6PDrvYkp9z8XaYwOT/OzPms="


class MainTest(unittest.TestCase):
    """Tests for cognitosrp.main."""

    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.addCleanup(Logger.set_level)
        self.addCleanup(ConfigLoader.reload_config)

    def _run(self, *argv: str) -> tuple[int, str]:
        out = io.StringIO()
        with redirect_stdout(out):
            status = cli.main(["-s", *argv])
        return status, out.getvalue()

    def _challenge_file(self, payload) -> str:
        path = Path(self.tmp.name) / "challenge.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)

    def test_initiate(self) -> None:
        """Prints AuthParameters and a replayable private exponent."""
        status, output = self._run("initiate", "-u", "alice", "--pool-id", "eu-west-2_Xy7Qa")
        self.assertEqual(status, 0)

        result = json.loads(output)
        self.assertEqual(result["AuthParameters"]["USERNAME"], "alice")
        self.assertEqual(len(result["PrivateExponent"]), 32)
        self.assertGreater(int(result["AuthParameters"]["SRP_A"], 16), 1)

    def test_respond_reproduces_vector(self) -> None:
        """A fixed exponent and clock give the pinned signature."""
        challenge = self._challenge_file({"ChallengeName": "PASSWORD_VERIFIER", "ChallengeParameters": CHALLENGE_2})
        moment = datetime(2026, 3, 5, 9, 4, 7, tzinfo=timezone.utc)

        with patch.object(srp_module, "_utc_now", return_value=moment):
            status, output = self._run(
                "respond", "-u", "alice", "--pool-id", "eu-west-2_Xy7Qa",
                "--challenge", challenge,
                "--private-exponent", "80000000000000000000000000000001",
                "--password", "correct horse battery staple",
            )

        self.assertEqual(status, 0)
        responses = json.loads(output)["ChallengeResponses"]
        self.assertEqual(responses["PASSWORD_CLAIM_SIGNATURE"], EXPECTED_SIGNATURE_2)
        self.assertEqual(responses["TIMESTAMP"], "Thu Mar 5 09:04:07 UTC 2026")
        self.assertEqual(responses["PASSWORD_CLAIM_SECRET_BLOCK"], CHALLENGE_2["SECRET_BLOCK"])

    def test_respond_prompts_for_password(self) -> None:
        challenge = self._challenge_file(CHALLENGE_2)
        with patch.object(cli.getpass, "getpass", return_value="pw") as prompt:
            status, output = self._run(
                "respond", "-u", "alice", "--pool-id", "eu-west-2_Xy7Qa",
                "--challenge", challenge,
                "--private-exponent", "80000000000000000000000000000001",
            )
        self.assertEqual(status, 0)
        prompt.assert_called_once()
        self.assertIn("PASSWORD_CLAIM_SIGNATURE", json.loads(output)["ChallengeResponses"])

    def test_protocol_abort_exits_with_error(self) -> None:
        challenge = self._challenge_file(dict(CHALLENGE_2, SRP_B="0"))
        status, output = self._run(
            "respond", "-u", "alice", "--pool-id", "eu-west-2_Xy7Qa",
            "--challenge", challenge,
            "--private-exponent", "80000000000000000000000000000001",
            "--password", "pw",
        )
        self.assertEqual(status, 1)
        self.assertEqual(output, "")

    def test_bad_private_exponent(self) -> None:
        challenge = self._challenge_file(CHALLENGE_2)
        status, _ = self._run(
            "respond", "-u", "alice", "--pool-id", "eu-west-2_Xy7Qa",
            "--challenge", challenge, "--private-exponent", "abcd", "--password", "pw",
        )
        self.assertEqual(status, 1)

    def test_missing_challenge_file(self) -> None:
        status, _ = self._run(
            "respond", "-u", "alice", "--pool-id", "eu-west-2_Xy7Qa",
            "--challenge", str(Path(self.tmp.name) / "nope.json"),
            "--private-exponent", "80000000000000000000000000000001", "--password", "pw",
        )
        self.assertEqual(status, 1)

    def test_json_output_with_logging_enabled(self) -> None:
        """Without --silent, stdout still parses as JSON."""
        Logger.set_level("ALL")
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            status = cli.main(["initiate", "-u", "alice", "--pool-id", "eu-west-2_Xy7Qa"])

        self.assertEqual(status, 0)
        self.assertEqual(json.loads(out.getvalue())["AuthParameters"]["USERNAME"], "alice")
        self.assertIn("[WARNING]", err.getvalue())

    def test_pool_id_from_config(self) -> None:
        overlay = Path(self.tmp.name) / "overlay.yaml"
        overlay.write_text("cognito:\n  user_pool_id: eu-west-2_Xy7Qa\n", encoding="utf-8")
        status, output = self._run("-c", str(overlay), "initiate", "-u", "alice")
        self.assertEqual(status, 0)
        self.assertIn("SRP_A", json.loads(output)["AuthParameters"])

    def test_missing_pool_id(self) -> None:
        status, _ = self._run("initiate", "-u", "alice")
        self.assertEqual(status, 1)


if __name__ == "__main__":
    unittest.main()
