"""
Exit Codes and Error Reporting for the lmc Command
==================================================

Every failure the ``lmc`` command can hit is turned into one message on
stderr and one exit code:

====  ==================  ===============================================
Code  Name                Raised for
====  ==================  ===============================================
0     SUCCESS             program halted normally
1     PROGRAM_ERROR       assembly diagnostics, runtime errors, step limit
2     INVALID_ARGS        bad options, unreadable source files
3     INTERNAL_ERROR      anything else (a bug in lmc itself)
====  ==================  ===============================================

Copyright (c) 2026 LMC SDK Contributors
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from lmc_sdk.errors import AssemblyFailedError, LMCError, MachineError


class ExitCode(IntEnum):
    """Process exit codes of the lmc command."""
    SUCCESS = 0
    PROGRAM_ERROR = 1
    INVALID_ARGS = 2
    INTERNAL_ERROR = 3


def describe_error(error: Exception, stage: str | None = None) -> tuple[ExitCode, str]:
    """
    Map an exception to its exit code and stderr message.

    Args:
        error: The exception raised while assembling or running
        stage: "Assembly" or "Runtime"; prefixes single-error messages

    Returns:
        (exit code, message) pair
    """
    if isinstance(error, AssemblyFailedError):
        # Already a full report with locations and a summary line
        return ExitCode.PROGRAM_ERROR, str(error)

    if isinstance(error, LMCError):
        if stage is None:
            stage = "Runtime" if isinstance(error, MachineError) else "Assembly"
        return ExitCode.PROGRAM_ERROR, f"{stage} error: {error}"

    if isinstance(error, click.BadParameter):
        return ExitCode.INVALID_ARGS, f"Error: {error.format_message()}"

    if isinstance(error, OSError) and error.filename is not None:
        reason = error.strerror or str(error)
        return ExitCode.INVALID_ARGS, f"Error: cannot read {error.filename}: {reason}"

    return ExitCode.INTERNAL_ERROR, f"Internal error: {error}"


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None
) -> NoReturn:
    """
    Report error on stderr and exit.

    A traceback is printed for internal errors when verbose is set.

    Raises:
        SystemExit: Always
    """
    code, message = describe_error(error, error_type)
    click.echo(message, err=True)
    if code is ExitCode.INTERNAL_ERROR and verbose:
        traceback.print_exc()
    sys.exit(code)
