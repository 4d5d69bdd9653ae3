#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Exception types raised by the arithmetic and SRP engines."""


class SRPError(Exception):
    """Base class for every error raised by cognitosrp."""


class DomainError(SRPError, ValueError):
    """Arithmetic precondition violated (bad modulus, no inverse, ...)."""


class ProtocolAbortError(SRPError, RuntimeError):
    """
    A degenerate protocol value was detected (A, B or u congruent to zero).

    The whole authentication attempt must be abandoned; a retry needs fresh
    ephemeral secrets.
    """


class InvalidInputError(SRPError, ValueError):
    """Malformed hex, Base64 or challenge parameters supplied by a caller."""


class SRPStateError(SRPError, RuntimeError):
    """Protocol operation called in the wrong engine state."""
