from __future__ import annotations
import re

from . import engine
from .base import MongoBase
from .utils import hash_id

__all__ = ['User', 'Role']

Role = engine.User.Role


class User(MongoBase, engine=engine.User):

    @classmethod
    def signup(
        cls,
        username: str,
        password: str,
        email: str,
    ) -> User:
        if re.match(r'^[\w\-]+$', username) is None:
            raise ValueError(f'Invalid username [username={username}]')
        user = cls.engine(
            username=username,
            user_id=hash_id(username, password),
            email=email.lower().strip(),
        )
        # mongomock does not always honor the unique index
        if cls(username):
            raise engine.NotUniqueError('User')
        if cls.engine.objects(email=user.email):
            raise engine.NotUniqueError('Email')
        user.save(force_insert=True)
        return cls(user)

    @classmethod
    def get_by_username(cls, username: str) -> User:
        obj = cls.engine.objects.get(username=username)
        return cls(obj)

    @classmethod
    def get_by_email(cls, email: str) -> User:
        obj = cls.engine.objects.get(email=email.lower().strip())
        return cls(obj)

    @classmethod
    def login(cls, username_or_email: str, password: str):
        '''
        Check credentials and issue a new auth token.

        Any token the user held before is dropped, so a user has at most
        one live token. Returns `(user, token)`.
        Raises `DoesNotExist` if the credentials are wrong.
        '''
        from .auth_token import AuthToken
        try:
            user = cls.get_by_username(username_or_email)
        except engine.DoesNotExist:
            user = cls.get_by_email(username_or_email)
        if user.user_id != hash_id(user.username, password):
            raise engine.DoesNotExist('Wrong password')
        AuthToken.revoke_all(user)
        token = AuthToken.issue(user)
        user.logger.info(f'{user} logged in')
        return user, token

    def logout(self):
        from .auth_token import AuthToken
        removed = AuthToken.revoke_all(self)
        self.logger.info(f'{self} logged out [removed={removed}]')

    def change_password(self, password: str):
        from .auth_token import AuthToken
        self.update(user_id=hash_id(self.username, password))
        self.reload()
        AuthToken.revoke_all(self)
