from .args import parse_args
from .menus import MenuChoice, Menus

__all__ = ['parse_args', 'MenuChoice', 'Menus']
