"""
LMC SDK Command-Line Interface
==============================

This package provides the ``lmc`` command, which assembles a Little Man
Computer source file and then prints its memory dump, prints its listing,
or runs it.

The tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["lmc"]
