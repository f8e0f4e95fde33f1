"""Exam ticket generator: .docx question banks split into blocks, one question per block per ticket."""

from .models import Block, Question, QuestionImage, Ticket, TicketQuestion

__version__ = "0.1.0"

__all__ = ['Block', 'Question', 'QuestionImage', 'Ticket', 'TicketQuestion']
