from . import auth
from . import contest
from . import problem
from . import run

from .auth import *
from .contest import *
from .problem import *
from .run import *

__all__ = [
    *auth.__all__,
    *contest.__all__,
    *problem.__all__,
    *run.__all__,
]
