import random
import logging
from typing import List, Optional, Sequence, TypeVar

from ticketgen.exceptions import (
    EmptyBlockError,
    InsufficientQuestionsError,
    InvalidTicketCountError
)
from ticketgen.models import Block, Question, Ticket, TicketQuestion

logger = logging.getLogger(__name__)

T = TypeVar('T')


class TicketSampler:
    """Assemble exam tickets by drawing one question from every block."""

    def __init__(self, rng=None, seed: Optional[int] = None):
        """Initialize ticket sampler.

        Args:
            rng: Random source with a ``randint(a, b)`` method. Defaults to the
                process-wide ``random`` module
            seed: Random seed for reproducibility, used only if rng is not given
        """
        if rng is not None:
            self.rng = rng
        elif seed is not None:
            self.rng = random.Random(seed)
            logger.info(f"Ticket sampler initialized with seed {seed}")
        else:
            self.rng = random

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """Return a Fisher-Yates shuffled copy of ``items``."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = self.rng.randint(0, i)
            result[i], result[j] = result[j], result[i]
        return result

    def check_preconditions(self,
                            blocks: Sequence[Block],
                            ticket_count: int,
                            strict_no_repeat: bool) -> None:
        """Raise if tickets cannot be generated for the given blocks.

        Raises:
            InvalidTicketCountError: ticket_count is not a positive integer
            EmptyBlockError: a block has no questions
            InsufficientQuestionsError: strict_no_repeat is set and a block
                has fewer questions than tickets requested
        """
        if isinstance(ticket_count, bool) or not isinstance(ticket_count, int) or ticket_count < 1:
            raise InvalidTicketCountError(ticket_count)

        # The first offending block in document order is reported
        for block in blocks:
            if not block.questions:
                raise EmptyBlockError(block.name)
            if strict_no_repeat and len(block.questions) < ticket_count:
                raise InsufficientQuestionsError(block.name, len(block.questions), ticket_count)

    def generate(self,
                 blocks: Sequence[Block],
                 ticket_count: int,
                 strict_no_repeat: bool = False) -> List[Ticket]:
        """Generate tickets.

        Each block's questions are shuffled once per call. Ticket ``i`` takes
        the ``i``-th shuffled question of every block. Without strict_no_repeat
        a block with fewer questions than tickets wraps around, so its
        questions repeat with a period equal to the block size.

        Args:
            blocks: Parsed blocks, in document order
            ticket_count: Number of tickets to generate
            strict_no_repeat: Forbid reusing a question across tickets

        Returns:
            Tickets numbered from 1, each with one question per block
        """
        self.check_preconditions(blocks, ticket_count, strict_no_repeat)

        shuffled: List[List[Question]] = [self.shuffle(block.questions) for block in blocks]

        tickets = []
        for i in range(ticket_count):
            ticket_questions = []
            for block, questions in zip(blocks, shuffled):
                position = i if strict_no_repeat else i % len(questions)
                ticket_questions.append(TicketQuestion(block_name=block.name, question=questions[position]))
            tickets.append(Ticket(number=i + 1, questions=ticket_questions))

        policy = "strict no-repeat" if strict_no_repeat else "wrap-around"
        logger.info(f"Generated {len(tickets)} tickets from {len(blocks)} blocks ({policy})")

        for block in blocks:
            if not strict_no_repeat and len(block.questions) < ticket_count:
                logger.info(f"Block '{block.name}' has {len(block.questions)} questions; "
                            f"questions repeat across {ticket_count} tickets")

        return tickets
