"""Line-oriented terminal input and output."""

from __future__ import annotations

import re
import sys

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_CLEAR = "\033[2J\033[H"


class Console:
    """Reads answers from an input stream and writes text to an output stream."""

    def __init__(self, input=None, output=None, clear_screen=None):
        self.input = input if input is not None else sys.stdin
        self.output = output if output is not None else sys.stdout
        if clear_screen is None:
            isatty = getattr(self.output, "isatty", None)
            clear_screen = bool(isatty and isatty())
        self.clear_screen = clear_screen

    def write(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()

    def read_line(self, prompt: str = "") -> str:
        """Show ``prompt`` and return the next line without its line ending."""
        if prompt:
            self.write(prompt)
        line = self.input.readline()
        if not line:
            raise EOFError("no more input")
        return line.rstrip("\r\n")

    def read_int(self, prompt: str = "") -> int:
        """Ask until a line starting with an integer is given."""
        while True:
            match = _LEADING_INT.match(self.read_line(prompt))
            if match:
                return int(match.group(1))
            self.write("Entrada inválida. Digite um número.\n")

    def ask_yes_no(
        self, prompt: str, error: str = "Opção inválida. Digite S (Sim) ou N (Não)\n"
    ) -> bool:
        """Ask until the answer starts with S or N; return True for S."""
        while True:
            answer = self.read_line(prompt)
            first = answer[:1].upper()
            if first == "S":
                return True
            if first == "N":
                return False
            self.write(error)

    def clear(self) -> None:
        if self.clear_screen:
            self.write(_CLEAR)