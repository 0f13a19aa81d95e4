"""
MedGuide Console - Text Front-End

Maps one line of user input to a service call and returns the text to
print. Kept free of input()/print() so it can be driven from tests.
"""

import logging
from typing import List

from medguide.app import MedGuideApp
from medguide.services import Notice

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  add <name> <HH:MM> <once|daily|alternate>  - Add a medicine reminder
  list                                       - List reminders
  delete <number|id>                         - Delete a reminder
  lookup <name>                              - FDA adverse event lookup
  suggest <text>                             - Medicine name suggestions
  analyze <name>                             - Safety summary
  help                                       - Show this text
  quit                                       - Exit"""


def _render_notices(notices: List[Notice]) -> str:
    return "\n".join(f"{'✗' if n.is_error else '✓'} {n}" for n in notices)


def _cmd_add(app: MedGuideApp, args: str) -> str:
    parts = args.split()
    if len(parts) < 3:
        name, time, frequency = args, "", ""
    else:
        name, time, frequency = " ".join(parts[:-2]), parts[-2], parts[-1]
    return _render_notices(app.reminders.add_reminder(name, time, frequency))


def _cmd_list(app: MedGuideApp, args: str) -> str:
    reminders = app.reminders.list_reminders()
    lines = [f"📋 {app.reminders.summary()}"]
    for index, reminder in enumerate(reminders, start=1):
        lines.append(f"  {index}. {app.reminders.format_reminder(reminder)}  [{reminder.id}]")
    return "\n".join(lines)


def _cmd_delete(app: MedGuideApp, args: str) -> str:
    target = args.strip()
    if not target:
        return "✗ Usage: delete <number|id>"

    reminder_id = target
    if target.isdigit():
        reminders = app.reminders.list_reminders()
        index = int(target)
        if 1 <= index <= len(reminders):
            reminder_id = reminders[index - 1].id

    return _render_notices(app.reminders.delete_reminder(reminder_id))


def _cmd_lookup(app: MedGuideApp, args: str) -> str:
    notice = app.lookup.lookup(args)
    text = _render_notices([notice])
    result = app.lookup.state.result
    if not notice.is_error and result is not None:
        text += "\n" + app.lookup.format_info(result)
    return text


def _cmd_suggest(app: MedGuideApp, args: str) -> str:
    names = app.lookup.suggest(args)
    if not names:
        return "No suggestions"
    return "\n".join(f"  💊 {name}" for name in names)


def _cmd_analyze(app: MedGuideApp, args: str) -> str:
    name = args.strip()
    if not name:
        return "✗ Usage: analyze <name>"
    return app.lookup.format_analysis(name, app.lookup.analyze(name))


COMMANDS = {
    "add": _cmd_add,
    "list": _cmd_list,
    "reminders": _cmd_list,
    "delete": _cmd_delete,
    "lookup": _cmd_lookup,
    "suggest": _cmd_suggest,
    "analyze": _cmd_analyze,
}


def handle_command(app: MedGuideApp, line: str) -> str:
    """
    Execute one console command.

    Args:
        app: Initialized MedGuideApp
        line: Raw user input

    Returns:
        Text to show the user
    """
    line = line.strip()
    if not line:
        return ""

    command, _, args = line.partition(" ")
    command = command.lower()

    if command == "help":
        return HELP_TEXT

    handler = COMMANDS.get(command)
    if handler is None:
        return f"Unknown command '{command}'. Type 'help' for commands."

    logger.debug(f"Console command: {command}")
    return handler(app, args)
