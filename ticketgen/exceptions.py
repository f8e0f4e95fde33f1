class TicketGenError(Exception):
    """Base class for all errors raised by the ticket generator."""


class DocumentConversionError(TicketGenError):
    """The source document could not be converted to HTML."""


class TicketGenerationError(TicketGenError):
    """Tickets could not be assembled from the parsed blocks."""


class InvalidTicketCountError(TicketGenerationError):
    def __init__(self, count):
        self.count = count
        super().__init__(f"Ticket count must be a positive integer, got {count!r}")


class InsufficientQuestionsError(TicketGenerationError):
    """A block has fewer questions than tickets requested under strict-no-repeat."""

    def __init__(self, block_name: str, available: int, requested: int):
        self.block_name = block_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Block '{block_name}' has {available} questions, "
            f"{requested} are needed for tickets without repeats"
        )


class EmptyBlockError(TicketGenerationError):
    def __init__(self, block_name: str):
        self.block_name = block_name
        super().__init__(f"Block '{block_name}' has no questions")
