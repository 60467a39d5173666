"""Reporting module - console and JSON output."""

from .console_reporter import (
    ConsoleReporter,
    message_for_one_file,
    message_for_result,
    message_for_summary,
)
from .json_reporter import JsonReporter

__all__ = [
    "ConsoleReporter",
    "message_for_one_file",
    "message_for_result",
    "message_for_summary",
    "JsonReporter",
]
