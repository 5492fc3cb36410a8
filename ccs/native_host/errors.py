"""Error types for the native messaging host."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class HostError:
    """Structured error for host I/O and decoding failures."""

    operation: str
    error_type: str
    message: str
    context: dict[str, object] = field(default_factory=dict)

    def __str__(self) -> str:
        """Human-readable error representation for logging."""
        max_len = 500
        base = f"HostError[{self.operation}] {self.error_type}: {self.message}"
        if self.context:
            ctx_str = str(self.context)
            if len(ctx_str) > max_len:
                ctx_str = ctx_str[: max_len - 3] + "..."
            base += f" | context={ctx_str}"
        return base
