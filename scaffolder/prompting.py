"""Prompt definitions and answer collection for generators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, TextIO

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm
from rich.prompt import Prompt as RichPrompt

from .errors import AnswerError

Answers = Dict[str, Any]

_TRUE = {"y", "yes", "true", "1", "on"}
_FALSE = {"n", "no", "false", "0", "off"}


@dataclass
class Prompt:
    """A question a generator asks before it runs.

    ``default`` and ``choices`` may be callables receiving the answers given
    so far, which lets a default depend on an earlier answer (for example the
    base package derived from the group id).
    """

    name: str
    message: str
    kind: str = "input"
    default: Any = None
    validate: Optional[Callable[[Any], Optional[str]]] = None
    when: Optional[Callable[[Answers], bool]] = None
    choices: Any = None

    def resolve_default(self, answers: Answers) -> Any:
        return self.default(answers) if callable(self.default) else self.default

    def resolve_choices(self, answers: Answers) -> List[str]:
        choices = self.choices(answers) if callable(self.choices) else self.choices
        return list(choices or [])

    def coerce(self, value: Any) -> Any:
        """Convert raw text (from the CLI or a terminal) to this prompt's type."""
        if self.kind == "confirm":
            if isinstance(value, bool):
                return value
            text = str(value).strip().lower()
            if text in _TRUE:
                return True
            if text in _FALSE:
                return False
            raise AnswerError(self.name, f"expected yes/no, got {value!r}")
        if self.kind == "list":
            if isinstance(value, (list, tuple)):
                return [str(item).strip() for item in value if str(item).strip()]
            return [part.strip() for part in str(value).split(",") if part.strip()]
        return "" if value is None else str(value).strip()


class AnswerCollector:
    """Resolves prompt answers from presets, a terminal, or defaults."""

    def __init__(
        self,
        *,
        interactive: bool = True,
        console: Console | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self.interactive = interactive
        self.console = console or Console(stderr=True)
        self._stream = stream

    def collect(self, prompts: Sequence[Prompt], presets: Mapping[str, Any] | None = None) -> Answers:
        presets = dict(presets or {})
        answers: Answers = {}
        for prompt in prompts:
            if prompt.when is not None and not prompt.when(answers):
                presets.pop(prompt.name, None)
                continue
            if prompt.name in presets:
                answers[prompt.name] = self._checked(prompt, prompt.coerce(presets.pop(prompt.name)))
                continue
            if self.interactive:
                answers[prompt.name] = self._ask(prompt, answers)
                continue
            answers[prompt.name] = self._checked(prompt, prompt.coerce(prompt.resolve_default(answers)))
        # Extra presets are passed through for generators that accept hidden answers.
        answers.update(presets)
        return answers

    def _ask(self, prompt: Prompt, answers: Answers) -> Any:
        default = prompt.resolve_default(answers)
        choices = prompt.resolve_choices(answers)
        while True:
            value = self._read(prompt, default, choices)
            message = prompt.validate(value) if prompt.validate else None
            if message is None:
                return value
            self.console.print(f"  {escape(message)}")

    def _read(self, prompt: Prompt, default: Any, choices: List[str]) -> Any:
        question = escape(prompt.message.rstrip().rstrip(":"))
        if prompt.kind == "confirm":
            return Confirm.ask(question, default=bool(default), console=self.console, stream=self._stream)

        options: Dict[str, Any] = {"console": self.console, "stream": self._stream}
        if prompt.kind == "list":
            # Comma-separated picks: choices are listed in the question, not checked by rich.
            if choices:
                question += " " + escape(f"[{', '.join(choices)}]")
        elif choices:
            options["choices"] = choices
        shown = ", ".join(default) if isinstance(default, (list, tuple)) else default
        if shown not in (None, ""):
            options["default"] = str(shown)
        raw = RichPrompt.ask(question, **options)
        return prompt.coerce(raw if raw and raw.strip() else default)

    def _checked(self, prompt: Prompt, value: Any) -> Any:
        if prompt.validate is not None:
            message = prompt.validate(value)
            if message is not None:
                raise AnswerError(prompt.name, message)
        return value


__all__ = ["AnswerCollector", "Answers", "Prompt"]
