"""
Operator prompts for decisions the sorter cannot make on its own.
"""

from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from rich.console import Console

from .constants import get_console

T = TypeVar("T")


class DecisionProvider:
    """Numbered-menu and free-text prompting on top of two primitives.

    Subclasses implement ``show`` and ``read``. Both ``choose`` and ``ask``
    block until a valid answer is given; there is no timeout.
    """

    def show(self, message: str) -> None:
        raise NotImplementedError

    def read(self) -> str:
        raise NotImplementedError

    def choose(self, title: str, options: Sequence[Tuple[str, str]]) -> str:
        """Present numbered options and return the token of the chosen one."""
        self.show(title)
        for token, label in options:
            self.show(f"{token}) {label}")

        tokens = [token for token, _ in options]
        while True:
            answer = self.read().strip()
            if answer in tokens:
                self.show(f"Your option: {answer}")
                return answer
            self.show(f"Invalid option {answer}. Choose {_join_tokens(tokens)}.")

    def ask(self, question: str, parse: Callable[[str], T]) -> T:
        """Ask until ``parse`` accepts the answer; ValueError means re-prompt."""
        self.show(question)
        while True:
            answer = self.read().strip()
            try:
                value = parse(answer)
            except ValueError as e:
                self.show(str(e))
                continue
            self.show(f"Your option: {answer}")
            return value


class ConsolePrompter(DecisionProvider):
    """Interactive prompts on the shared rich console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_console()

    def show(self, message: str) -> None:
        self.console.print(message, highlight=False, markup=False)

    def read(self) -> str:
        return self.console.input("> ")


def parse_year(answer: str) -> int:
    if len(answer) != 4 or not answer.isdigit():
        raise ValueError(f"Invalid input {answer}. expected a 4 digit number, e.g. 2022")
    return int(answer)


def parse_month(answer: str) -> int:
    if len(answer) != 2 or not answer.isdigit():
        raise ValueError(f"Invalid input {answer}. expected a two digit number, e.g. 12")
    month = int(answer)
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid input {answer}. expected a month between 01 and 12")
    return month


def _join_tokens(tokens: List[str]) -> str:
    if len(tokens) < 2:
        return "".join(tokens)
    return f"{', '.join(tokens[:-1])} or {tokens[-1]}"
