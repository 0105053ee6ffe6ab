"""Command-line interface helpers."""

from .args import ParsedArgs, PathValidationError, create_argument_parser, parse_arguments

__all__ = ["ParsedArgs", "PathValidationError", "create_argument_parser", "parse_arguments"]
