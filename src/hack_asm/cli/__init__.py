"""
Hack Assembler Command-Line Interface
=====================================

This package provides the command-line tools for the Hack assembler:

- **hackasm**: Hack assembler

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["hackasm"]
