"""GitHub Actions runner integration."""

from .commands import escape_data, escape_property, issue_command, set_failed, set_output, to_command_value

__all__ = ["escape_data", "escape_property", "issue_command", "set_failed", "set_output", "to_command_value"]
