from functools import wraps
from flask import Blueprint, request, current_app

from mongo import *
from mongo import engine
from .utils import *

__all__ = (
    'auth_api',
    'login_required',
    'identity_verify',
)

auth_api = Blueprint('auth_api', __name__)


def _get_token():
    token = request.cookies.get('auth_token')
    if token is not None:
        return token
    auth_header = request.headers.get('Authorization', '')
    if auth_header.lower().startswith('bearer '):
        return auth_header.split(' ', 1)[1]
    return None


def login_required(func):
    '''Check if the user is login

    Returns:
        - A wrapped function
        - 403 Not Logged In
        - 403 Invalid Token
        - 403 Inactive User
    '''

    @wraps(func)
    def wrapper(*args, **kwargs):
        token = _get_token()
        if token is None:
            return HTTPError('Not Logged In', 403)
        try:
            auth_token = AuthToken.get_by_token(token)
        except engine.DoesNotExist:
            return HTTPError('Invalid Token', 403, logout=True)
        user = User(auth_token.user)
        if not user.active:
            return HTTPError('Inactive User', 403)
        kwargs['user'] = user
        return func(*args, **kwargs)

    return wrapper


def identity_verify(*roles):
    '''Verify a logged in user's identity
    '''

    def verify(func):

        @wraps(func)
        @login_required
        def wrapper(user, *args, **kwargs):
            if user.role not in roles:
                return HTTPError('Insufficient Permissions', 403)
            kwargs['user'] = user
            return func(*args, **kwargs)

        return wrapper

    return verify


@auth_api.route('/session', methods=['GET', 'POST'])
def session():
    '''Create a session or remove a session.
    Request methods:
        GET: Logout
        POST: Login
    '''

    @login_required
    def logout(user):
        '''Logout a user.
        Returns:
            - 200 Logout Success
        '''
        user.logout()
        cookies = {'auth_token': None}
        return HTTPResponse('Goodbye', cookies=cookies)

    @Request.json('username_or_email: str', 'password: str')
    def login(username_or_email, password):
        '''Login a user.
        Returns:
            - 400 Incomplete Data
            - 403 Login Failed
        '''
        try:
            user, token = User.login(username_or_email, password)
        except DoesNotExist:
            current_app.logger.info(
                f'login failed [username_or_email={username_or_email}]')
            return HTTPError('Login Failed', 403)
        if not user.active:
            user.logout()
            return HTTPError('Inactive User', 403)
        cookies = {'auth_token_httponly': token.token}
        return HTTPResponse(
            'Login Success',
            data={'authToken': token.token},
            cookies=cookies,
        )

    methods = {'GET': logout, 'POST': login}

    return methods[request.method]()


@auth_api.route('/me', methods=['GET'])
@login_required
def get_me(user):
    return HTTPResponse('Success', data=user.info)

