from .__version__ import __version__
from .elements import ElementKind, RecordShape
from .errors import UnsupportedInputError
from .grouper import Grouper

__all__ = [
    "__version__",
    "ElementKind",
    "Grouper",
    "RecordShape",
    "UnsupportedInputError",
]
