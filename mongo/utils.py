import calendar
import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from functools import wraps
from typing import Optional

import jwt

from config import JWT_SECRET
from . import engine

__all__ = (
    'hash_id',
    'jwt_encode',
    'jwt_decode',
    'to_timestamp',
    'from_timestamp',
    'doc_required',
)


def hash_id(salt, text):
    text = ((salt or '') + (text or '')).encode()
    sha = hashlib.sha3_512(text)
    return sha.hexdigest()[:24]


def jwt_encode(data: dict, days: int = 7) -> str:
    '''
    sign `data` together with a random nonce, so two tokens issued for
    the same payload are never equal
    '''
    now = datetime.now(timezone.utc)
    payload = {
        'iss': 'contest-oj',
        'iat': now,
        'exp': now + timedelta(days=days),
        'nonce': secrets.token_hex(8),
        'data': data,
    }
    return jwt.encode(payload, JWT_SECRET, algorithm='HS256')


def jwt_decode(token: str) -> Optional[dict]:
    try:
        return jwt.decode(
            token,
            JWT_SECRET,
            issuer='contest-oj',
            algorithms=['HS256'],
        )
    except jwt.exceptions.PyJWTError:
        return None


def to_timestamp(dt: datetime) -> int:
    '''naive datetimes from the database are UTC'''
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return calendar.timegm(dt.utctimetuple())


def from_timestamp(ts) -> datetime:
    return datetime.fromtimestamp(int(ts), timezone.utc).replace(tzinfo=None)


def doc_required(src, des, cls=None, src_none_allowed=False):
    '''
    Replace keyword argument `src` with `cls(src)` passed as `des`.

    `doc_required('run', Run)` swaps the `run` key for the wrapped
    document. A key that matches nothing raises `engine.DoesNotExist`.
    '''
    if cls is None:
        des, cls = src, des
    if not isinstance(cls, type):
        raise TypeError('cls must be a type')

    def deco(func):

        @wraps(func)
        def wrapper(*args, **ks):
            if src not in ks:
                raise TypeError(f'{src} not found in function argument')
            key = ks.pop(src)
            if key is None:
                if not src_none_allowed:
                    raise ValueError(f'{src} can not be None')
                doc = None
            else:
                doc = key if isinstance(key, cls) else cls(key)
                if not doc:
                    raise engine.DoesNotExist(f'{doc} not found!')
            if des in ks:
                raise TypeError(f'{des} already in function argument')
            ks[des] = doc
            return func(*args, **ks)

        return wrapper

    return deco
