# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Base class for every configuration or report problem."""


class InvalidRotorIdentifier(EnigmaError):
    pass


class InvalidReflectorIdentifier(EnigmaError):
    pass


class InvalidPosition(EnigmaError):
    pass


class InvalidPlugboardPair(EnigmaError):
    pass


class InvalidCharacter(EnigmaError, TypeError):
    """Raised for non-text input, or a non-letter given to transform_letter."""


class ConfigError(EnigmaError):
    pass


class ReportFormatError(EnigmaError):
    pass
