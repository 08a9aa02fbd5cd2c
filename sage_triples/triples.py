"""Triple - the atomic (subject, relation, object) statement of the graph."""

from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple


@dataclass(frozen=True)
class Triple:
    """
    Knowledge Graph triple.

    Attributes:
        subject: Label of the subject node
        relation: Label of the relation (predicate)
        object: Label of the object node

    Labels are not validated; empty strings are valid labels.
    """
    subject: str
    relation: str
    object: str

    def __iter__(self) -> Iterator[str]:
        yield self.subject
        yield self.relation
        yield self.object

    def __str__(self) -> str:
        return f"({self.subject} -- {self.relation} -- {self.object})"

    def __repr__(self) -> str:
        return f"({self.subject!r} -- {self.relation!r} -- {self.object!r})"

    def as_tuple(self) -> Tuple[str, str, str]:
        """Return the triple as a plain `(subject, relation, object)` tuple."""
        return (self.subject, self.relation, self.object)

    @classmethod
    def from_tuple(cls, data: Sequence[str]) -> "Triple":
        """Create from a 3-element `(subject, relation, object)` sequence."""
        if len(data) != 3:
            raise ValueError(
                f"Triple needs exactly 3 labels (subject, relation, object), got {len(data)}"
            )
        subject, relation, obj = data
        return cls(subject, relation, obj)
