from .base import MutationRequest

__all__ = ['MutationRequest']
