from dataclasses import dataclass


@dataclass(slots=True)
class DropTimer:
    elapsed_ms: float = 0.0

    def reset(self) -> None:
        self.elapsed_ms = 0.0
