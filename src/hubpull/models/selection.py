"""Numbered selection lists."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from pydantic import BaseModel, Field

from hubpull.utils.errors import SelectionOutOfRangeError


def is_index_selection(text: str) -> bool:
    """Check whether user input is a purely numeric list selection.

    Args:
        text: Raw user input

    Returns:
        True if the input consists only of ASCII digits
    """
    return bool(text) and text.isascii() and text.isdigit()


class SelectionEntry(BaseModel):
    """One numbered row of a selection list."""

    model_config = {"frozen": True}

    index: int = Field(ge=1, description="1-based display index")
    label: str = Field(description="Underlying value")


class SelectionList(BaseModel):
    """An ordered, 1-indexed list mapping displayed numbers to values.

    Built once per prompt and never modified; a new prompt gets a new
    list.

    Example:
        tags = SelectionList.build(["latest", "1.27", "1.26"])
        tags.resolve(2)  # "1.27"
    """

    model_config = {"frozen": True}

    labels: tuple[str, ...] = Field(default=(), description="Labels in display order")

    @classmethod
    def build(cls, labels: Sequence[str]) -> SelectionList:
        """Build a list whose indices follow the input order."""
        return cls(labels=tuple(labels))

    @classmethod
    def empty(cls) -> SelectionList:
        return cls()

    def resolve(self, index: int) -> str:
        """Map a displayed index back to its label.

        Args:
            index: 1-based index

        Returns:
            The label at that index

        Raises:
            SelectionOutOfRangeError: If index is outside [1, len]
        """
        if index < 1 or index > len(self.labels):
            raise SelectionOutOfRangeError(index, len(self.labels))
        return self.labels[index - 1]

    @property
    def entries(self) -> list[SelectionEntry]:
        return [SelectionEntry(index=i, label=label) for i, label in enumerate(self.labels, 1)]

    def __len__(self) -> int:
        return len(self.labels)

    def __bool__(self) -> bool:
        return bool(self.labels)

    def numbered(self) -> Iterator[tuple[int, str]]:
        """Iterate over ``(index, label)`` pairs in display order."""
        return enumerate(self.labels, 1)
