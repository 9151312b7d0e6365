from typing import Callable, List

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings


# ========== Key bindings ==========
class KeyBindingManager:
    """Enter inserts a newline, Ctrl+J or Esc Enter submits, Ctrl+C clears."""

    SUBMIT_KEYS = (("c-j",), ("escape", "enter"))

    def __init__(self, accept_callback: Callable[[], None], clear_callback: Callable[[], None]):
        self.bindings = KeyBindings()
        self.submit_labels: List[str] = []

        for keys in self.SUBMIT_KEYS:
            self.bindings.add(*keys)(lambda event: accept_callback())
            self.submit_labels.append(self._label(keys))

        self.bindings.add("c-c")(lambda event: clear_callback())

    @staticmethod
    def _label(keys) -> str:
        names = {"c-j": "Ctrl+J", "escape": "Esc", "enter": "Enter"}
        return " ".join(names.get(k, k) for k in keys)


class SessionFactory:
    @staticmethod
    def build_session(bindings: KeyBindings) -> PromptSession:
        return PromptSession(multiline=True, key_bindings=bindings)

    @staticmethod
    def make_prompt_fragments(counter: int) -> FormattedText:
        return FormattedText([
            ("ansicyan bold", f"[{counter}] "),
            ("", "message> "),
        ])
