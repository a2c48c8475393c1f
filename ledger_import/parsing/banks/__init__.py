from .insjam import InsjamConverter
from .rzbmru import RzbmruConverter

# Detection is first-match-wins in this order
CONVERTERS = [
    InsjamConverter(),
    RzbmruConverter(),
]

__all__ = [
    'CONVERTERS',
    'InsjamConverter',
    'RzbmruConverter',
]
