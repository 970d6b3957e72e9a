from . import engine
from . import user
from . import auth_token
from . import problem
from . import contest
from . import run
from . import grader
from . import file_uploader

from .engine import *
from .user import *
from .auth_token import *
from .problem import *
from .contest import *
from .run import *
from .grader import *
from .file_uploader import *

__all__ = [
    *engine.__all__,
    *user.__all__,
    *auth_token.__all__,
    *problem.__all__,
    *contest.__all__,
    *run.__all__,
    *grader.__all__,
    *file_uploader.__all__,
]
