import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

# durée d'affichage d'un message transitoire (secondes)
MESSAGE_TIMEOUT_SECONDS = 3.0


class MessageKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class Message:
    text: str
    kind: MessageKind
    expires_at: float


class MessageBox:
    """
    Message de confirmation / d'erreur d'une page, effacé automatiquement
    après MESSAGE_TIMEOUT_SECONDS (évalué à la lecture, contre l'horloge injectée).
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, timeout: float = MESSAGE_TIMEOUT_SECONDS):
        self.clock = clock
        self.timeout = timeout
        self._message: Optional[Message] = None

    def show(self, text: str, kind: MessageKind) -> None:
        self._message = Message(text=text, kind=kind, expires_at=self.clock() + self.timeout)

    def success(self, text: str) -> None:
        self.show(text, MessageKind.SUCCESS)

    def error(self, text: str) -> None:
        self.show(text, MessageKind.ERROR)

    def clear(self) -> None:
        self._message = None

    @property
    def current(self) -> Optional[Message]:
        if self._message is not None and self.clock() >= self._message.expires_at:
            self._message = None
        return self._message

    @property
    def text(self) -> str:
        message = self.current
        return message.text if message else ""

    @property
    def kind(self) -> Optional[MessageKind]:
        message = self.current
        return message.kind if message else None
