from .ticket_overview import TicketOverviewGenerator
from .word_generator import WordGenerator

__all__ = ['TicketOverviewGenerator', 'WordGenerator']
