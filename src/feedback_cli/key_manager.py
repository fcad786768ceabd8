from typing import Callable, List

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings, KeyPressEvent
from prompt_toolkit.lexers import Lexer, PygmentsLexer, SimpleLexer
from pygments.lexers.markup import MarkdownLexer

from feedback_cli.utils import FIELD_LABELS

KeyCallback = Callable[[KeyPressEvent], None]


# ========== Key bindings ==========
class KeyBindingManager:
    SUBMIT_KEYS = (("c-j",), ("escape", "enter"))
    SUBMIT_LABELS = {("c-j",): "Ctrl+J", ("escape", "enter"): "Esc+Enter"}

    def __init__(self, accept_callback: KeyCallback, clear_callback: KeyCallback):
        self.bindings = KeyBindings()
        self.submit_labels: List[str] = []

        for keys in self.SUBMIT_KEYS:
            self.bindings.add(*keys)(accept_callback)
            self.submit_labels.append(self.SUBMIT_LABELS[keys])

        self.bindings.add("c-c")(clear_callback)


# ========== Prompt session ==========
class SessionFactory:
    @staticmethod
    def build_session(bindings: KeyBindings) -> PromptSession:
        return PromptSession(key_bindings=bindings)

    @staticmethod
    def lexer_for(field: str) -> Lexer:
        # the comment is free-form, highlight it as markdown
        if field == "comment":
            return PygmentsLexer(MarkdownLexer)
        return SimpleLexer()

    @staticmethod
    def make_prompt_fragments(counter: int, field: str) -> FormattedText:
        return FormattedText([
            ("ansicyan bold", f"[{counter}] "),
            ("bold", f"{FIELD_LABELS[field]}"),
            ("", " > "),
        ])
