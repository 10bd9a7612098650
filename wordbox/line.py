"""
Line interface for the operator.

End of input is a normal outcome: read() and confirm() return None and the
caller winds down and exits with status 0.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO


class LineInterface:
    """Prompt/read/confirm over a pair of text streams."""

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def say(self, text: str = "") -> None:
        print(text, file=self.stdout)

    def read(self, prompt: str) -> Optional[str]:
        """
        Show `prompt => ` and read one line.

        Returns:
            The line without its newline, or None at end of input
        """
        print(f"{prompt} => ", end="", file=self.stdout)
        self.stdout.flush()

        line = self.stdin.readline()
        if line == "":
            # Finish the prompt line before the caller exits
            print(file=self.stdout)
            return None
        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
        return line

    def confirm(self, prompt: str, default: bool) -> Optional[bool]:
        """
        Ask a yes/no question until y or n (any case) or an empty line is given.

        Returns:
            True/False, the default for an empty line, or None at end of input
        """
        suffix = "[Yn]?" if default else "[yN]?"
        while True:
            got = self.read(f"{prompt} {suffix}")
            if got is None:
                return None
            answer = got.lower()
            if answer == "":
                return default
            if answer == "y":
                return True
            if answer == "n":
                return False
