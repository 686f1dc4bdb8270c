"""Validated console input. Malformed answers are re-asked here, never in the engines."""

from typing import Callable, Collection, TypeVar

from rich.console import Console

from core.participants import Action
from core.rps import Move

T = TypeVar("T")


class ConsolePrompts:
    """Asks questions until a valid answer is given."""

    def __init__(
        self,
        console: Console | None = None,
        read: Callable[[str], str] | None = None,
    ) -> None:
        """
        Args:
            console: Where prompts and complaints are printed
            read: Line reader, defaults to console.input
        """
        self.console = console or Console()
        self._read = read or self.console.input

    def ask(self, prompt: str, parse: Callable[[str], T], complaint: str) -> T:
        """Read lines until parse() accepts one."""
        while True:
            answer = self._read(prompt)
            try:
                return parse(answer)
            except ValueError:
                self.console.print(f"[yellow]{complaint}[/yellow]")

    def hit_or_stay(self, prompt: str) -> Action:
        """Decision source for the Twenty-One player."""
        return self.ask(
            f"\n{prompt}",
            Action.from_token,
            "Invalid choice. Enter 'H' to hit or 'S' to stay.",
        )

    def yes_no(self, prompt: str) -> bool:
        def parse(answer: str) -> bool:
            normalized = answer.strip().lower()
            if normalized in ("y", "yes"):
                return True
            if normalized in ("n", "no"):
                return False
            raise ValueError(answer)

        return self.ask(f"\n{prompt} (Y/N) ", parse, "Sorry, you must enter Y for yes or N for no.")

    def name(self, prompt: str = "Enter your name: ") -> str:
        def parse(answer: str) -> str:
            if not answer.strip():
                raise ValueError(answer)
            return answer.strip()

        return self.ask(prompt, parse, "Sorry, you must enter a value.")

    def rps_move(self) -> Move:
        return self.ask(
            "Please choose rock, paper, scissors, lizard, or spock: ",
            Move.from_token,
            "Sorry, invalid choice.",
        )

    def square(self, open_squares: Collection[int]) -> int:
        def parse(answer: str) -> int:
            key = int(answer.strip())
            if key not in open_squares:
                raise ValueError(answer)
            return key

        return self.ask(
            f"Choose a square from: {join_or(sorted(open_squares))} ",
            parse,
            "Sorry, that is not a valid choice.",
        )

    def heads_or_tails(self) -> bool:
        """True if the player calls heads."""

        def parse(answer: str) -> bool:
            normalized = answer.strip().lower()
            if normalized in ("h", "heads"):
                return True
            if normalized in ("t", "tails"):
                return False
            raise ValueError(answer)

        return self.ask(
            "Choose heads or tails (H/T): ",
            parse,
            "Invalid choice. Enter 'H' for heads or 'T' for tails.",
        )

    def marker(self, suggestions: tuple[str, ...]) -> str:
        """A single visible character, or a number picking one of the suggestions."""

        def parse(answer: str) -> str:
            answer = answer.strip()
            if answer.isdigit() and 1 <= int(answer) <= len(suggestions):
                return suggestions[int(answer) - 1]
            if len(answer) != 1:
                raise ValueError(answer)
            return answer

        listing = "  ".join(f"{i}={m}" for i, m in enumerate(suggestions, start=1))
        return self.ask(
            f"Choose any one character as your marker, or a number: {listing} ",
            parse,
            "Sorry, you must enter a single character.",
        )

    def wait_for_enter(self) -> None:
        self._read("\nPress ENTER to continue.")


def join_or(items: list[int], separator: str = ", ", last: str = "or") -> str:
    """'1, 2 or 3' style listing."""
    words = [str(item) for item in items]
    if len(words) <= 1:
        return "".join(words)
    return f"{separator.join(words[:-1])} {last} {words[-1]}"
