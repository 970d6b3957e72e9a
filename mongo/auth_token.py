from __future__ import annotations
from datetime import datetime
from typing import List

from . import engine
from .base import MongoBase
from .user import User
from .utils import jwt_encode, jwt_decode

__all__ = ['AuthToken']


class AuthToken(MongoBase, engine=engine.AuthToken):
    '''
    A login session. The token string itself is a signed JWT carrying the
    owner's username, but a token is only accepted while its record exists.
    '''

    @classmethod
    def issue(cls, user: User) -> AuthToken:
        token = jwt_encode({'username': user.username})
        obj = cls.engine(
            token=token,
            user=user.obj,
            create_time=datetime.utcnow(),
        ).save()
        return cls(obj)

    @classmethod
    def find_by_user(cls, username) -> List[AuthToken]:
        '''
        All stored tokens of a user, newest first.
        '''
        if isinstance(username, (User, engine.User)):
            username = username.username
        return [
            cls(obj) for obj in cls.engine.objects(
                user=username).order_by('-create_time')
        ]

    @classmethod
    def get_by_token(cls, token: str) -> AuthToken:
        '''
        Resolve a live token and refresh its last access time.
        Raises `DoesNotExist` if the token is forged, expired or revoked.
        '''
        payload = jwt_decode(token)
        if payload is None:
            raise engine.DoesNotExist('Invalid token')
        obj = cls.engine.objects.get(token=token)
        if obj.user.username != payload['data'].get('username'):
            raise engine.DoesNotExist('Token owner mismatch')
        obj.update(last_access=datetime.utcnow())
        obj.reload()
        return cls(obj)

    @classmethod
    def revoke_all(cls, user) -> int:
        if isinstance(user, (User, engine.User)):
            user = user.username
        return cls.engine.objects(user=user).delete()
