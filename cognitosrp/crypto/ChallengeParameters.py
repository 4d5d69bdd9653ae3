#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from collections.abc import Mapping
from dataclasses import dataclass

from cognitosrp.crypto.Errors import InvalidInputError


@dataclass(frozen=True)
class ChallengeParameters:
    """
    PASSWORD_VERIFIER challenge as sent by the identity service.

    Values are kept in their wire form (hex / URL-safe Base64); they are
    validated when the signature is computed.
    """

    user_id: str
    salt: str
    secret_block: str
    srp_b: str

    WIRE_KEYS = {
        "user_id": "USER_ID_FOR_SRP",
        "salt": "SALT",
        "secret_block": "SECRET_BLOCK",
        "srp_b": "SRP_B",
    }

    @classmethod
    def from_dict(cls, params: Mapping) -> "ChallengeParameters":
        """
        Build from the service's ChallengeParameters mapping.

        Raises:
            InvalidInputError: if a key is missing or not a string.
        """
        if not isinstance(params, Mapping):
            raise InvalidInputError(f"Challenge parameters must be a mapping, got {type(params).__name__}")

        values = {}
        for attr, wire_key in cls.WIRE_KEYS.items():
            value = params.get(wire_key)
            if not isinstance(value, str):
                raise InvalidInputError(f"Challenge parameter {wire_key} missing or not a string")
            values[attr] = value

        return cls(**values)

    def to_dict(self) -> dict:
        return {wire_key: getattr(self, attr) for attr, wire_key in self.WIRE_KEYS.items()}
