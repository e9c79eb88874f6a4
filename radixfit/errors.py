"""Exception types raised by the decoder, the recovery engine and the case loader."""

from __future__ import annotations

from typing import Any


class RadixfitError(ValueError):
    """Root of every error the package raises on bad input."""


# --- Decoder
class DecodeError(RadixfitError):
    pass


class InvalidBase(DecodeError):
    def __init__(self, base: Any) -> None:
        self.base = base
        super().__init__(f"Base must be an integer in [2, 36], got {base!r}")


class InvalidCharacter(DecodeError):
    def __init__(self, char: str, position: int) -> None:
        self.char = char
        self.position = position
        if char: msg = f"Invalid character in base conversion: {char!r} at position {position}"
        else: msg = "Empty digit string"
        super().__init__(msg)


class DigitOutOfRange(DecodeError):
    def __init__(self, digit: int, base: int, position: int) -> None:
        self.digit = digit
        self.base = base
        self.position = position
        super().__init__(f"Digit value {digit} is invalid for base {base} (position {position})")


class DecodeOverflow(DecodeError, OverflowError):
    def __init__(self, digits: str, base: int) -> None:
        self.digits = digits
        self.base = base
        super().__init__(f"{digits!r} in base {base} does not fit in a signed 64-bit integer")


# --- Recovery
class RecoveryError(RadixfitError):
    pass


class EmptyInput(RecoveryError):
    def __init__(self) -> None:
        super().__init__("No sample points provided")


# --- Loader
class CaseFormatError(RadixfitError):
    pass
