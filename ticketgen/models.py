from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class QuestionImage:
    """An image embedded in a question.

    ``width`` and ``height`` are the intrinsic pixel dimensions read from the
    image header, or ``None`` when they could not be determined.
    """
    content_type: str
    data: bytes
    width: Optional[int] = None
    height: Optional[int] = None

    @property
    def has_dimensions(self) -> bool:
        return bool(self.width and self.height)


@dataclass
class Question:
    """A single exam item: text and/or images."""
    text: str = ""
    images: List[QuestionImage] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.text and not self.images


@dataclass
class Block:
    """A named group of questions, delimited by a block header in the source."""
    name: str
    questions: List[Question] = field(default_factory=list)


@dataclass(frozen=True)
class TicketQuestion:
    block_name: str
    question: Question


@dataclass
class Ticket:
    number: int
    questions: List[TicketQuestion] = field(default_factory=list)
