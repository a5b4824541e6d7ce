"""
Terminal prompt for the change request.
"""

import sys
from typing import Optional, TextIO
from loguru import logger

from ..constants import REQUIREMENT_PROMPT
from ..exceptions import RequirementError


class RequirementPrompt:
    """Single-shot blocking prompt that reads one line of user intent."""

    def __init__(
        self,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
        prompt_text: str = REQUIREMENT_PROMPT
    ):
        self.input_stream = input_stream or sys.stdin
        self.output_stream = output_stream or sys.stdout
        self.prompt_text = prompt_text

    def read_requirement(self) -> str:
        """
        Ask for the change request and block until one line is entered.

        Returns:
            The line as typed, without its trailing newline

        Raises:
            RequirementError: If the input stream is closed before a line arrives
        """
        self.output_stream.write(self.prompt_text)
        self.output_stream.flush()

        line = self.input_stream.readline()
        if not line:
            raise RequirementError("Input closed before a change request was entered")

        requirement = line[:-1] if line.endswith("\n") else line
        logger.info(f"User requirements: {requirement}")
        return requirement
