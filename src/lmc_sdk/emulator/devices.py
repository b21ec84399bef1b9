"""
LMC Input and Output Devices
============================

INP reads one integer from an input device and OUT writes the accumulator
to an output device. The CPU only sees the two small protocols below, so
the same machine can be driven by a fixed list of values (tests, the
``-i`` CLI option) or by an operator at a terminal.

Input Exhaustion
----------------
When a device has nothing left to give, the policy decides what INP sees:

- ``"error"`` (default): raise InputExhaustedError, stopping the run
- ``"zero"``: supply 0

Input Parsing
-------------
Interactive input must be a decimal integer, optionally signed; anything
else raises InvalidInputError. The CPU reduces the value into 0-999.
"""

from collections import deque
from typing import Iterable, Literal, Protocol
import logging
import re

import click

from lmc_sdk.errors import InputExhaustedError, InvalidInputError

logger = logging.getLogger(__name__)


ExhaustionPolicy = Literal["error", "zero"]

EXHAUSTION_POLICIES: tuple[str, ...] = ("error", "zero")

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def parse_input(text: str) -> int:
    """
    Parse one line of operator input.

    Raises:
        InvalidInputError: If text is not a decimal integer
    """
    stripped = text.strip()
    if not _INTEGER_RE.fullmatch(stripped):
        raise InvalidInputError(text)
    return int(stripped)


def _check_policy(policy: str) -> None:
    if policy not in EXHAUSTION_POLICIES:
        raise ValueError(
            f"unknown input exhaustion policy {policy!r}; "
            f"expected one of {', '.join(EXHAUSTION_POLICIES)}"
        )


def _exhausted(policy: str) -> int:
    if policy == "zero":
        logger.debug("input exhausted, supplying 0")
        return 0
    raise InputExhaustedError()


# =============================================================================
# Protocols
# =============================================================================

class InputDevice(Protocol):
    """Source of values for INP."""

    def read(self) -> int:
        """Return the next input value."""
        ...


class OutputDevice(Protocol):
    """Sink for values written by OUT."""

    def write(self, value: int) -> None:
        """Accept one output value (0-999)."""
        ...


# =============================================================================
# Input Devices
# =============================================================================

class QueuedInput:
    """
    Input device fed from a fixed sequence of integers.

    Example:
        >>> device = QueuedInput([3, 4])
        >>> device.read(), device.read()
        (3, 4)
    """

    def __init__(self, values: Iterable[int] = (), on_exhausted: ExhaustionPolicy = "error"):
        _check_policy(on_exhausted)
        self._values: deque[int] = deque(values)
        self.on_exhausted = on_exhausted

    @property
    def remaining(self) -> int:
        """Number of values not yet read."""
        return len(self._values)

    def feed(self, *values: int) -> None:
        """Append more values."""
        self._values.extend(values)

    def read(self) -> int:
        if self._values:
            return self._values.popleft()
        return _exhausted(self.on_exhausted)


class InteractiveInput:
    """
    Input device that prompts the operator with click.

    End of input (EOF or Ctrl-C at the prompt) counts as exhaustion.
    """

    def __init__(self, prompt: str = "lmc> ", on_exhausted: ExhaustionPolicy = "error"):
        _check_policy(on_exhausted)
        self.prompt = prompt
        self.on_exhausted = on_exhausted

    def read(self) -> int:
        try:
            text = click.prompt(self.prompt, prompt_suffix="", type=str)
        except click.Abort:
            return _exhausted(self.on_exhausted)
        return parse_input(text)


# =============================================================================
# Output Devices
# =============================================================================

class CollectingOutput:
    """Output device that records every value."""

    def __init__(self):
        self.values: list[int] = []

    def write(self, value: int) -> None:
        self.values.append(value)

    def clear(self) -> None:
        self.values.clear()


class EchoOutput(CollectingOutput):
    """Output device that records values and prints each on its own line."""

    def write(self, value: int) -> None:
        super().write(value)
        click.echo(value)
