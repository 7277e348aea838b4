from . import change, get

__all__ = ['change', 'get']
