from .Person import Person

__all__ = ["Person"]
