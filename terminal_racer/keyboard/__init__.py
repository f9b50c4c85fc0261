from .keys import (
    KeyKind, KeyToken, NO_KEY, UP_ARROW, DOWN_ARROW, LEFT_ARROW, RIGHT_ARROW,
    parse_key_name
)
from .decoder import InputDecoder

__all__ = ['KeyKind', 'KeyToken', 'NO_KEY', 'UP_ARROW', 'DOWN_ARROW', 'LEFT_ARROW',
           'RIGHT_ARROW', 'parse_key_name', 'InputDecoder']
