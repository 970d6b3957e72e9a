from flask import jsonify, current_app

__all__ = ['HTTPResponse', 'HTTPError']

AUTH_COOKIE = 'auth_token'


def _secure_cookies() -> bool:
    try:
        return current_app.config.get('PREFERRED_URL_SCHEME') == 'https'
    except RuntimeError:
        return False


def _apply_cookies(resp, cookies):
    '''
    set or clear cookies on `resp`

    a `None` value clears the cookie, a key ending with `_httponly`
    sets an httponly cookie named without that suffix
    '''
    secure = _secure_cookies()
    for key, value in cookies.items():
        if value is None:
            resp.delete_cookie(key)
            continue
        name, httponly = key, key.endswith('_httponly')
        if httponly:
            name = key[:-len('_httponly')]
        resp.set_cookie(
            name,
            value,
            httponly=httponly,
            samesite='Lax',
            secure=secure,
        )


class HTTPResponse(tuple):
    '''
    `(response, status_code)` pair with the JSON envelope
    `{status, message, data}`
    '''

    def __new__(
        cls,
        message='',
        status_code=200,
        status='ok',
        data=None,
        cookies=None,
    ):
        resp = jsonify({
            'status': status,
            'message': message,
            'data': data,
        })
        _apply_cookies(resp, cookies or {})
        return super().__new__(tuple, (resp, status_code))


class HTTPError(HTTPResponse):

    def __new__(
        cls,
        message,
        status_code,
        data=None,
        logout=False,
    ):
        cookies = {AUTH_COOKIE: None} if logout else None
        return super().__new__(
            cls,
            message,
            status_code,
            'err',
            data,
            cookies,
        )
