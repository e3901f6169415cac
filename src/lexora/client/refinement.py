"""Client-side refinement conversation with undo."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RefinementTurn:
    """One instruction, its result, and the text it replaced."""

    instruction: str
    result: str
    text_before: str


@dataclass
class RefinementChain:
    """Ordered log of refinement turns over one summary's text.

    Undo pops the most recent turn and restores the text that preceded
    it. Undo on an empty chain does nothing.
    """

    original_text: str
    current_text: str = ""
    turns: list[RefinementTurn] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.current_text:
            self.current_text = self.original_text

    def record(self, instruction: str, result: str) -> None:
        self.turns.append(
            RefinementTurn(instruction=instruction, result=result, text_before=self.current_text)
        )
        self.current_text = result

    def undo(self) -> bool:
        """Drop the last turn. Returns False when there was nothing to undo."""
        if not self.turns:
            return False
        turn = self.turns.pop()
        self.current_text = turn.text_before
        return True

    def mark_saved(self) -> None:
        """Make the current text the baseline. Turns stay undoable."""
        self.original_text = self.current_text

    @property
    def can_undo(self) -> bool:
        return bool(self.turns)

    @property
    def is_modified(self) -> bool:
        return self.current_text != self.original_text

    def conversation(self) -> list[tuple[str, str]]:
        """Flatten turns into (role, content) messages for display."""
        messages: list[tuple[str, str]] = []
        for turn in self.turns:
            messages.append(("user", turn.instruction))
            messages.append(("ai", turn.result))
        return messages
