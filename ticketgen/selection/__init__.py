from .ticket_sampler import TicketSampler

__all__ = ['TicketSampler']
