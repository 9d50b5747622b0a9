"""components.messages — Player-facing transient messages.

A ring-buffer resource that records every message shown to the player.
Only the newest entry is live: posting a message replaces whatever was
on screen, and the live message stops being shown ``lifetime`` seconds
after it was posted.

Usage:
    log = MessageLog()
    log.post("+1 wood (3)", t=clock.time)
    log.update(dt)
    text, alpha = log.visible() or ("", 0.0)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from core.constants import MESSAGE_LIFETIME, MESSAGE_FADE


@dataclass
class TransientMessage:
    text: str
    age: float = 0.0           # s since posted

    def opacity(self, fade: float = MESSAGE_FADE) -> float:
        return max(0.0, 1.0 - self.age / fade)


@dataclass
class MessageLog:
    entries: list[dict] = field(default_factory=list)
    max_entries: int = 100
    lifetime: float = MESSAGE_LIFETIME
    fade: float = MESSAGE_FADE
    current: TransientMessage | None = None

    def post(self, text: str, *, t: float = 0.0) -> None:
        self.current = TransientMessage(text)
        self.entries.append({"t": t, "msg": text})
        if len(self.entries) > self.max_entries:
            self.entries = self.entries[-self.max_entries:]

    def update(self, dt: float) -> None:
        if self.current is not None:
            self.current.age += dt

    def visible(self) -> tuple[str, float] | None:
        """Return ``(text, opacity)`` for the live message, or None."""
        msg = self.current
        if msg is None or msg.age >= self.lifetime:
            return None
        return msg.text, msg.opacity(self.fade)

    def clear(self):
        self.entries.clear()
        self.current = None
