"""
lmc - Little Man Computer Command-Line Interface
================================================

This module implements the ``lmc`` command. It assembles an LMC source
file and then, depending on the options, prints the memory dump, prints
an assembly listing, or runs the program.

Usage Examples
--------------
Run a program, prompting for each INP:
    $ lmc add.lmc

Show the assembled memory instead of running:
    $ lmc -s add.lmc

Run with input values supplied up front:
    $ lmc -i 3 -i 4 add.lmc

Listing and label table:
    $ lmc -l --symbols add.lmc

Trace every executed instruction (to stderr):
    $ lmc --trace -i 3 -i 4 add.lmc

Environment
-----------
LMC_MAX_STEPS, LMC_INPUT_EXHAUSTED and LMC_TRACE provide defaults for
--max-steps, --on-input-exhausted and --trace.

Copyright (c) 2026 LMC SDK Contributors
"""

from dataclasses import replace
from pathlib import Path
from typing import Optional
import logging
import sys

import click

from lmc_sdk import __version__
from lmc_sdk.assembler import Assembler, AssembledProgram
from lmc_sdk.cli.errors import ExitCode, handle_cli_exception
from lmc_sdk.emulator import (
    EXHAUSTION_POLICIES,
    BreakReason,
    EchoOutput,
    Emulator,
    EmulatorConfig,
    InteractiveInput,
    QueuedInput,
)

logger = logging.getLogger(__name__)


class Context:
    """
    Options shared by the assemble and run stages.
    """

    def __init__(self, verbose: bool = False, trace: bool = False) -> None:
        self.verbose = verbose
        self.trace = trace

    def setup_logging(self) -> None:
        """Configure logging based on verbosity."""
        level = logging.DEBUG if self.verbose else logging.INFO
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(message)s" if self.verbose else "%(message)s",
        )
        if self.trace:
            # Trace lines are DEBUG records from the emulator
            logging.getLogger("lmc_sdk.emulator").setLevel(logging.DEBUG)


def format_symbols(program: AssembledProgram) -> str:
    """Label table, one ``name address`` line per label, by address."""
    return "\n".join(
        f"{name:<16} {address:3d}"
        for name, address in sorted(program.labels.items(), key=lambda item: (item[1], item[0]))
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-s", "--show",
    is_flag=True,
    help="Print the assembled memory dump instead of running",
)
@click.option(
    "-l", "--listing",
    is_flag=True,
    help="Print the assembly listing instead of running",
)
@click.option(
    "--symbols",
    is_flag=True,
    help="Print the label table instead of running",
)
@click.option(
    "-i", "--input", "inputs",
    multiple=True,
    type=int,
    help="Value for INP (can be repeated). Without it, INP prompts for input.",
)
@click.option(
    "--max-steps",
    type=click.IntRange(min=0),
    default=None,
    help="Stop with an error after this many instructions (default: no limit)",
)
@click.option(
    "--on-input-exhausted",
    type=click.Choice(EXHAUSTION_POLICIES),
    default=None,
    help="What INP does when no input is left: fail (error) or read 0 (zero). Default: error.",
)
@click.option(
    "--trace",
    is_flag=True,
    help="Log every executed instruction to stderr",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="lmc")
def main(
    input_file: Path,
    show: bool,
    listing: bool,
    symbols: bool,
    inputs: tuple[int, ...],
    max_steps: Optional[int],
    on_input_exhausted: Optional[str],
    trace: bool,
    verbose: bool,
) -> None:
    """
    Assemble and run a Little Man Computer program.

    INPUT_FILE is the LMC assembly source file to assemble.

    \b
    Examples:
        lmc add.lmc               # Assemble and run
        lmc -s add.lmc            # Print the memory dump
        lmc -i 3 -i 4 add.lmc     # Run with input values
        lmc -l --symbols add.lmc  # Listing and label table
    """
    # Command-line flags override environment defaults
    config = EmulatorConfig.from_env()
    overrides: dict = {}
    if max_steps is not None:
        overrides["max_steps"] = max_steps
    if on_input_exhausted is not None:
        overrides["on_input_exhausted"] = on_input_exhausted
    if trace:
        overrides["trace"] = True
    config = replace(config, **overrides)

    ctx = Context(verbose=verbose, trace=config.trace)
    ctx.setup_logging()

    # Assemble
    try:
        asm = Assembler(verbose=verbose)
        program = asm.assemble_file(input_file)
    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")

    if not verbose:
        for warning in program.warnings:
            click.echo(f"warning: {warning}", err=True)

    if show or listing or symbols:
        if show:
            click.echo(program.dump())
        if listing:
            click.echo(program.listing_text())
        if symbols and program.labels:
            click.echo(format_symbols(program))
        return

    # Run
    try:
        if inputs:
            input_device = QueuedInput(inputs, on_exhausted=config.on_input_exhausted)
        else:
            input_device = InteractiveInput(config.input_prompt, on_exhausted=config.on_input_exhausted)

        emu = Emulator(config, input_device=input_device, output_device=EchoOutput())
        emu.load_program(program)
        event = emu.run()
    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Runtime")

    logger.debug("%s after %d step(s)", event, emu.get_state().steps)

    if event.reason is not BreakReason.HALTED:
        click.echo(f"Error: {event}", err=True)
        sys.exit(ExitCode.PROGRAM_ERROR)


if __name__ == "__main__":
    main()
