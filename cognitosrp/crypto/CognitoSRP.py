#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
CognitoSRP - client-side SRP-6a values for the Cognito password verifier flow.

Purpose
-------
Given a user pool name, a password and the PASSWORD_VERIFIER challenge, this
module produces:
    * A, the client public value sent with the initiate-auth request
    * the password claim signature, proving knowledge of the password

It computes values only; sending them is the caller's job.

Flow
----
    x = H(pad(salt) | H(pool | userId | ":" | password))
    u = H(pad(A) | pad(B))
    S = (B - k * g^x) ^ (a + u * x) mod N
    hkdf = HMAC(HMAC(pad(u), pad(S)), "Caldera Derived Key" | 0x01)
    sig  = HMAC(hkdf[:16], pool | userId | secretBlock | timestamp)

State
-----
An engine models one in-flight attempt: Initialized -> Challenged. It is not
thread-safe; use one instance per attempt. The group parameters are shared.
"""

import hashlib
import hmac
import os
from collections.abc import Callable, Mapping
from datetime import datetime, timezone

from cognitosrp.crypto.BigIntCodec import (
    b64_encode,
    padded_bytes,
    parse_hex_int,
    url_b64_decode,
)
from cognitosrp.crypto.ChallengeParameters import ChallengeParameters
from cognitosrp.crypto.Errors import (
    InvalidInputError,
    ProtocolAbortError,
    SRPStateError,
)
from cognitosrp.crypto.GroupParameters import DEFAULT_GROUP, GroupParameters
from cognitosrp.crypto.ModularArithmetic import mod_pow, to_zn
from cognitosrp.utils.Logger import Logger

EPHEMERAL_BYTES = 16
DERIVED_KEY_INFO = b"Caldera Derived Key" + b"\x01"
DERIVED_KEY_LENGTH = 16

WEEK_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def sha256(*parts: bytes) -> bytes:
    """SHA-256 over concatenated byte sequences."""
    sha = hashlib.sha256()
    for part in parts:
        sha.update(part)
    return sha.digest()


def hmac_sha256(key: bytes, *parts: bytes) -> bytes:
    """HMAC-SHA-256 over concatenated byte sequences."""
    mac = hmac.new(key, digestmod=hashlib.sha256)
    for part in parts:
        mac.update(part)
    return mac.digest()


def hash_to_int(*parts: bytes) -> int:
    """SHA-256 digest read as a big-endian unsigned integer."""
    return int.from_bytes(sha256(*parts), "big")


def create_timestamp(moment: datetime) -> str:
    """
    Render moment as "<Dow> <Mon> <D> <HH>:<MM>:<SS> UTC <YYYY>".

    Naive datetimes are taken to be UTC already. Names are fixed English
    abbreviations, independent of the process locale.
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)

    return (
        f"{WEEK_DAYS[moment.weekday()]} {MONTHS[moment.month - 1]} {moment.day} "
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d} UTC {moment.year}"
    )


def user_pool_name_from_id(user_pool_id: str) -> str:
    """
    Return the pool name part of a pool id ("us-east-1_AbC" -> "AbC").

    Raises:
        InvalidInputError: if the id is not "<region>_<name>".
    """
    if not isinstance(user_pool_id, str):
        raise InvalidInputError(f"Invalid user pool id: {user_pool_id!r}")

    region, _, name = user_pool_id.partition("_")
    if not region or not name or "_" in name:
        raise InvalidInputError(f"Invalid user pool id: {user_pool_id!r}")
    return name


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CognitoSRP:
    """
    SRP-6a client engine for one authentication attempt.

    Attributes
    ----------
    user_pool_name : str
        Pool name mixed into x and into the signed message.
    group : GroupParameters
        Shared, immutable N / g / k.
    large_a_value : int | None
        A once generated.
    timestamp : str | None
        Timestamp signed by the last compute_password_claim_signature call;
        it must be sent along with the signature.
    """

    def __init__(
        self,
        user_pool_name: str,
        random_bytes: Callable[[int], bytes] = os.urandom,
        clock: Callable[[], datetime] | None = None,
        group: GroupParameters = DEFAULT_GROUP,
    ) -> None:
        if not isinstance(user_pool_name, str) or not user_pool_name:
            raise InvalidInputError("user_pool_name must be a non-empty string")

        self.user_pool_name = user_pool_name
        self.group = group

        self._random_bytes = random_bytes
        self._clock = clock or _utc_now

        self._small_a_value = None
        self.large_a_value = None
        self.timestamp = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_challenged(self) -> bool:
        return self.large_a_value is not None

    def reset(self) -> None:
        """Drop ephemeral secrets; the engine returns to Initialized."""
        self._small_a_value = None
        self.large_a_value = None
        self.timestamp = None

    # ------------------------------------------------------------------
    # A
    # ------------------------------------------------------------------

    def _draw_private_exponent(self) -> int:
        buffer = self._random_bytes(EPHEMERAL_BYTES)
        if not isinstance(buffer, (bytes, bytearray)) or len(buffer) != EPHEMERAL_BYTES:
            raise InvalidInputError(
                f"Random source must return {EPHEMERAL_BYTES} bytes, "
                f"got {len(buffer) if isinstance(buffer, (bytes, bytearray)) else type(buffer).__name__}"
            )
        return int.from_bytes(buffer, "big")

    def generate_client_public_value(self) -> str:
        """
        Draw a fresh private exponent a and compute A = g^a mod N.

        Any previous ephemeral state is replaced.

        Returns:
            str: A as lower-case hex.

        Raises:
            ProtocolAbortError: if A mod N == 0.
        """
        self.reset()

        small_a = self._draw_private_exponent()
        large_a = mod_pow(self.group.g, small_a, self.group.N)

        if large_a % self.group.N == 0:
            raise ProtocolAbortError("Illegal parameter. A mod N cannot be 0.")

        self._small_a_value = small_a
        self.large_a_value = large_a

        Logger.debug(f"[SRP] Generated A ({large_a.bit_length()} bits)")
        return format(large_a, "x")

    # ------------------------------------------------------------------
    # Derivations
    # ------------------------------------------------------------------

    def calculate_u(self, large_b: int) -> int:
        """
        u = H(pad(A) | pad(B)).

        Raises:
            ProtocolAbortError: if u == 0.
        """
        u_value = hash_to_int(padded_bytes(self.large_a_value), padded_bytes(large_b))
        if u_value == 0:
            raise ProtocolAbortError("U cannot be zero.")
        return u_value

    def calculate_x(self, user_id: str, password: str, salt: int) -> int:
        """x = H(pad(salt) | H(pool | userId | ":" | password))."""
        identity_hash = sha256(f"{self.user_pool_name}{user_id}:{password}".encode("utf-8"))
        return hash_to_int(padded_bytes(salt), identity_hash)

    def calculate_s(self, x_value: int, large_b: int, u_value: int) -> int:
        """S = (B - k * g^x mod N) ^ (a + u * x) mod N."""
        N = self.group.N
        g_x = mod_pow(self.group.g, x_value, N)
        base = large_b - self.group.k * g_x
        exponent = self._small_a_value + u_value * x_value
        return to_zn(mod_pow(base, exponent, N), N)

    @staticmethod
    def derive_claim_key(u_value: int, s_value: int) -> bytes:
        """16-byte claim key: HMAC(HMAC(pad(u), pad(S)), info)[:16]."""
        prk = hmac_sha256(padded_bytes(u_value), padded_bytes(s_value))
        return hmac_sha256(prk, DERIVED_KEY_INFO)[:DERIVED_KEY_LENGTH]

    # ------------------------------------------------------------------
    # Signature
    # ------------------------------------------------------------------

    def compute_password_claim_signature(
        self,
        password: str,
        challenge: ChallengeParameters | Mapping,
    ) -> str:
        """
        Compute the PASSWORD_CLAIM_SIGNATURE for the server challenge.

        A fresh timestamp is generated, signed and stored in self.timestamp.
        Either a complete signature is returned or an error is raised.

        Args:
            password (str): The user's password.
            challenge: ChallengeParameters or the raw challenge mapping.

        Returns:
            str: Standard Base64 signature.

        Raises:
            SRPStateError: if A has not been generated.
            InvalidInputError: on malformed challenge values.
            ProtocolAbortError: if B mod N == 0 or u == 0.
        """
        if not self.is_challenged:
            raise SRPStateError("generate_client_public_value() must be called before signing")
        if not isinstance(password, str):
            raise InvalidInputError("password must be a string")

        if not isinstance(challenge, ChallengeParameters):
            challenge = ChallengeParameters.from_dict(challenge)

        large_b = parse_hex_int(challenge.srp_b, "SRP_B")
        salt = parse_hex_int(challenge.salt, "SALT")
        secret_block = url_b64_decode(challenge.secret_block)

        if large_b % self.group.N == 0:
            raise ProtocolAbortError("Invalid server public value. B cannot be zero.")

        u_value = self.calculate_u(large_b)
        x_value = self.calculate_x(challenge.user_id, password, salt)
        s_value = self.calculate_s(x_value, large_b, u_value)
        claim_key = self.derive_claim_key(u_value, s_value)

        timestamp = create_timestamp(self._clock())
        signature = hmac_sha256(
            claim_key,
            self.user_pool_name.encode("utf-8"),
            challenge.user_id.encode("utf-8"),
            secret_block,
            timestamp.encode("utf-8"),
        )

        self.timestamp = timestamp
        Logger.debug(f"[SRP] Signed claim for {challenge.user_id} at {timestamp}")
        return b64_encode(signature)

    # ------------------------------------------------------------------
    # Request helpers
    # ------------------------------------------------------------------

    def build_auth_parameters(self, username: str) -> dict:
        """
        AuthParameters for USER_SRP_AUTH initiate-auth.

        Generates A when the engine is still Initialized.
        """
        if not self.is_challenged:
            self.generate_client_public_value()

        return {
            "USERNAME": username,
            "SRP_A": format(self.large_a_value, "x"),
        }

    def build_challenge_responses(
        self,
        username: str,
        password: str,
        challenge: ChallengeParameters | Mapping,
    ) -> dict:
        """ChallengeResponses answering the PASSWORD_VERIFIER challenge."""
        if not isinstance(challenge, ChallengeParameters):
            challenge = ChallengeParameters.from_dict(challenge)

        signature = self.compute_password_claim_signature(password, challenge)

        return {
            "USERNAME": username,
            "PASSWORD_CLAIM_SECRET_BLOCK": challenge.secret_block,
            "PASSWORD_CLAIM_SIGNATURE": signature,
            "TIMESTAMP": self.timestamp,
        }
