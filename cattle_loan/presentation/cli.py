"""
Command-line interface for the cattle loan application form.

This module provides a line-oriented shell for filling in the form,
managing cattle entries and submitting the application.
"""

import asyncio
import shlex
import sys
from typing import Callable, Dict, List, Optional, TextIO

from cattle_loan.config.logging_config import get_logger
from cattle_loan.domain.application.form_state import FormState
from cattle_loan.domain.application.models import Application
from cattle_loan.domain.application.validator import validate
from cattle_loan.domain.submission.orchestrator import SubmissionOrchestrator
from cattle_loan.utils.error_handling import FormStateError

logger = get_logger(__name__)

HELP_TEXT = """Commands:
  show                           Show the current application
  set <section.field> <value>    Set a field, e.g. set applicant.name "Ravi Kumar"
  cattle add                     Add a cattle entry
  cattle remove <n>              Remove cattle entry n
  cattle set <n> <field> <value> Set a field of cattle entry n
  check                          Validate without submitting
  submit                         Submit the application
  reset                          Clear the form
  help                           Show this help
  quit                           Exit"""

SECTION_TITLES = {
    "applicant": "Applicant Details",
    "farm": "Farm Details",
    "loan": "Loan Details",
    "banking": "Banking Information",
}


class CliInterface:
    """
    Command-line interface over a form and its submission workflow.
    
    Cattle entries are numbered from 1 here; the form itself indexes
    them from 0.
    """
    
    def __init__(
        self,
        form: FormState,
        orchestrator: SubmissionOrchestrator,
        output: Optional[TextIO] = None,
    ):
        """
        Initialize the CLI interface.
        
        Args:
            form: Form being edited
            orchestrator: Submission workflow for the form
            output: Stream for user-facing output, defaults to stdout
        """
        self.form = form
        self.orchestrator = orchestrator
        self.output = output or sys.stdout
        self.running = True
        
        self._commands: Dict[str, Callable[[List[str]], None]] = {
            "show": self._cmd_show,
            "set": self._cmd_set,
            "cattle": self._cmd_cattle,
            "check": self._cmd_check,
            "reset": self._cmd_reset,
            "help": self._cmd_help,
            "quit": self._cmd_quit,
            "exit": self._cmd_quit,
        }
        
        # Register outcome handlers
        self.orchestrator.on_validation_error(self._handle_validation_error)
        self.orchestrator.on_submit_result(self._handle_submit_result)
    
    def _print(self, text: str = "") -> None:
        print(text, file=self.output)
    
    def _handle_validation_error(self, reason: str) -> None:
        self._print(f"Validation Error: {reason}")
    
    def _handle_submit_result(self, ok: bool) -> None:
        if ok:
            self._print("Success: Application submitted successfully!")
        else:
            self._print("Error: Failed to submit application. Please try again.")
    
    async def handle_line(self, line: str) -> None:
        """
        Process one line of user input.
        
        Args:
            line: Raw command line
        """
        try:
            args = shlex.split(line)
        except ValueError as e:
            self._print(f"Could not parse command: {e}")
            return
        if not args:
            return
        
        command, rest = args[0].lower(), args[1:]
        if command == "submit":
            await self._cmd_submit(rest)
            return
        
        handler = self._commands.get(command)
        if handler is None:
            self._print(f"Unknown command '{command}'. Type 'help' for a list of commands.")
            return
        
        try:
            handler(rest)
        except FormStateError as e:
            logger.debug(f"Rejected command {line!r}: {e}")
            self._print(f"Error: {e.message}")
    
    async def run(self, input_stream: Optional[TextIO] = None) -> None:
        """
        Read and process commands until ``quit`` or end of input.
        
        Args:
            input_stream: Stream to read commands from, defaults to stdin
        """
        input_stream = input_stream or sys.stdin
        interactive = input_stream.isatty()
        self._print("Cattle Loan Application")
        self._print("Type 'help' for a list of commands.")
        
        while self.running:
            if interactive:
                self._print_prompt()
            line = await asyncio.to_thread(input_stream.readline)
            if not line:
                break
            await self.handle_line(line)
    
    def _print_prompt(self) -> None:
        self.output.write("loan> ")
        self.output.flush()
    
    def render(self, application: Application) -> str:
        """
        Format an application for display.
        
        Args:
            application: Snapshot to display
            
        Returns:
            str: Multi-line text
        """
        lines = []
        data = application.to_dict()
        for section in ("applicant", "farm"):
            lines.append(f"[{SECTION_TITLES[section]}]")
            lines.extend(f"  {key}: {value}" for key, value in data[section].items())
        
        lines.append("[Cattle Details]")
        for number, entry in enumerate(data["cattle"], start=1):
            lines.append(f"  Cattle #{number}")
            for key, value in entry.items():
                if key == "insuranceDetails" and not entry["insuranceStatus"]:
                    continue
                lines.append(f"    {key}: {value}")
        
        for section in ("loan", "banking"):
            lines.append(f"[{SECTION_TITLES[section]}]")
            lines.extend(f"  {key}: {value}" for key, value in data[section].items())
        return "\n".join(lines)
    
    def _cmd_show(self, args: List[str]) -> None:
        self._print(self.render(self.form.application))
    
    def _cmd_set(self, args: List[str]) -> None:
        if len(args) < 1:
            self._print("Usage: set <section.field> <value>")
            return
        self.form.set_field(args[0], " ".join(args[1:]))
    
    def _cmd_cattle(self, args: List[str]) -> None:
        action = args[0].lower() if args else ""
        if action == "add":
            self.form.add_cattle_entry()
            self._print(f"Added cattle #{self.form.cattle_count}")
        elif action == "remove" and len(args) == 2:
            index = self._parse_number(args[1])
            if index is None:
                return
            before = self.form.application
            if self.form.remove_cattle_entry(index) is before:
                self._print("At least one cattle entry is required")
                return
            self._print(f"Removed cattle #{index + 1}")
        elif action == "set" and len(args) >= 3:
            index = self._parse_number(args[1])
            if index is None:
                return
            value = " ".join(args[3:])
            if args[2] in ("insuranceStatus", "insurance_status"):
                value = _parse_yes_no(value)
            self.form.set_cattle_field(index, args[2], value)
        else:
            self._print("Usage: cattle add | cattle remove <n> | cattle set <n> <field> <value>")
    
    def _cmd_check(self, args: List[str]) -> None:
        result = validate(self.form.application)
        if result.is_valid:
            self._print("Application is complete")
        else:
            self._print(f"Validation Error: {result.reason}")
    
    async def _cmd_submit(self, args: List[str]) -> None:
        if self.orchestrator.is_busy:
            self._print("Submitting...")
            return
        await self.orchestrator.submit()
    
    def _cmd_reset(self, args: List[str]) -> None:
        self.form.reset()
        self._print("Form cleared")
    
    def _cmd_help(self, args: List[str]) -> None:
        self._print(HELP_TEXT)
    
    def _cmd_quit(self, args: List[str]) -> None:
        self.running = False
    
    def _parse_number(self, text: str) -> Optional[int]:
        """Convert a 1-based cattle number to a 0-based index."""
        if not text.isdigit() or int(text) < 1:
            self._print(f"Invalid cattle number '{text}'")
            return None
        return int(text) - 1


def _parse_yes_no(text: str) -> bool:
    return text.strip().lower() in ("yes", "y", "true", "1")
