"""
Comparison results and their human-readable report.

The comparison core returns a ValidationResult; turning it into a message is
a separate step so callers needing the raw path lists (structured logging,
partial tolerance) can work with them directly.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field


def format_field_report(missing: list[str], extra: list[str]) -> str:
    """
    Format missing and extra paths as one message.

    Extra fields come first, e.g.
    ``extra fields [Root->Phone] missing fields [Address->Zip]``.

    Params:
        missing: Paths the template needs that the data lacks
        extra: Paths the data offers that the template ignores

    Returns:
        Report text, empty when both lists are empty
    """
    parts = []
    if extra:
        parts.append(f"extra fields [{', '.join(extra)}]")
    if missing:
        parts.append(f"missing fields [{', '.join(missing)}]")
    return " ".join(parts)


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of comparing a template with its data shape.

    Unpacks as ``missing, extra = result``.

    Params:
        missing: Paths the template references that the data lacks
        extra: Paths the data declares that the template never uses
    """

    missing: list[str] = field(default_factory=list)
    extra: list[str] = field(default_factory=list)

    def __iter__(self) -> Iterator[list[str]]:
        yield self.missing
        yield self.extra

    @property
    def is_valid(self) -> bool:
        return not self.missing and not self.extra

    def without(self, *, missing: bool = False, extra: bool = False) -> "ValidationResult":
        """Return a copy with the selected lists emptied."""
        return ValidationResult(
            missing=[] if missing else list(self.missing),
            extra=[] if extra else list(self.extra),
        )

    def format_message(self) -> str:
        return format_field_report(self.missing, self.extra)
