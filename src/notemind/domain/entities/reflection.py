"""Reflection accumulator entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TextRange:
    """Character range in a document.

    Attributes:
        location: Offset of the first character.
        length: Number of characters.
    """

    location: int
    length: int

    @property
    def end(self) -> int:
        return self.location + self.length

    def fits(self, document: str) -> bool:
        """Check that the range lies within the document."""
        return self.location >= 0 and self.length >= 0 and self.end <= len(document)


@dataclass
class ReflectionAccumulator:
    """Reflection text collected for one request.

    The accumulated text is always spliced into the original base document,
    so every published document is computed from the same base and never
    from a previously published one.

    Attributes:
        base_document: Document text at the time the reflection started.
        selection: Selected range; the reflection goes after its end.
        text: Accumulated reflection text, including markers.
    """

    base_document: str
    selection: TextRange
    text: str = ""

    def append(self, delta: str) -> None:
        self.text += delta

    def splice(self) -> str:
        """Return the base document with the reflection inserted."""
        offset = self.selection.end
        return self.base_document[:offset] + self.text + self.base_document[offset:]
