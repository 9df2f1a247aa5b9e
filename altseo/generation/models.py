from dataclasses import dataclass


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of generating text for one document."""

    success: bool
    text: str | None = None
    message: str = ""

    @classmethod
    def ok(cls, text: str, message: str = "") -> "GenerationResult":
        return cls(success=True, text=text, message=message)

    @classmethod
    def failed(cls, message: str) -> "GenerationResult":
        return cls(success=False, message=message)
