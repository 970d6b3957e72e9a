from mongo import engine

from . import user
from . import contest
from . import problem
from . import session
from . import stubs

__all__ = (
    'drop_db',
    'user',
    'contest',
    'problem',
    'session',
    'stubs',
)


def drop_db():
    '''
    drop every collection, indexes are rebuilt on next access
    '''
    for doc in (
            engine.Run,
            engine.Contest,
            engine.Problem,
            engine.AuthToken,
            engine.User,
    ):
        doc.drop_collection()

