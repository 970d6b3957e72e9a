from functools import wraps
from flask import request, current_app
from mongo import engine
from mongo.utils import doc_required
from .response import *

__all__ = ('Request', )

type_map = {
    'int': int,
    'float': float,
    'list': list,
    'str': str,
    'dict': dict,
    'bool': bool,
    'None': type(None)
}


def _candidate_keys(param_name):
    '''snake_case parameter -> keys a client may have used'''
    parts = [p for p in param_name.split('_') if p]
    camel_key = parts[0] + ''.join(p.capitalize()
                                   for p in parts[1:]) if parts else param_name
    return [camel_key, param_name]


def _cast(value, target_type):
    if isinstance(value, target_type):
        # bool is an int, do not let it slip through
        if target_type in (int, float) and isinstance(value, bool):
            raise TypeError('bool is not a number')
        return value
    if target_type is bool:
        if isinstance(value, str) and value.lower() in ('true', 'false'):
            return value.lower() == 'true'
        raise ValueError(f'Invalid boolean: {value}')
    if target_type is float and isinstance(value, int):
        return float(value)
    if isinstance(value, str) and target_type in (int, float):
        return target_type(value)
    raise TypeError(f'cannot cast {type(value).__name__} '
                    f'to {target_type.__name__}')


class _Request(type):

    def __getattr__(self, content_type):

        def get(*keys, vars_dict={}):

            def data_func(func):

                @wraps(func)
                def wrapper(*args, **kwargs):
                    if content_type == 'json':
                        request_data = request.get_json(silent=True) or {}
                    else:
                        request_data = getattr(request, content_type)
                    if request_data is None:
                        return HTTPError(
                            f'Unaccepted Content-Type {content_type}', 415)
                    parsed_kwargs = {}
                    for key_spec in keys:
                        # 'name: type' means required and typed
                        if ':' in key_spec:
                            param_name, type_str = key_spec.split(':', 1)
                            param_name = param_name.strip()
                            target_type = type_map[type_str.strip()]
                        else:
                            param_name = key_spec.strip()
                            target_type = None
                        value = None
                        for k in _candidate_keys(param_name):
                            if k in request_data:
                                value = request_data[k]
                                break
                        if value is not None and target_type is not None:
                            try:
                                value = _cast(value, target_type)
                            except (ValueError, TypeError) as e:
                                current_app.logger.info(
                                    f'[Request Parsing] bad field '
                                    f'\'{param_name}\': {e}. '
                                    f'Caller: {func.__name__}')
                                value = None
                        if value is None and target_type is not None:
                            return HTTPError(
                                'Requested Value With Wrong Type', 400)
                        parsed_kwargs[param_name] = value
                    for v in vars_dict:
                        parsed_kwargs[v] = request_data.get(vars_dict[v])
                    kwargs.update(parsed_kwargs)
                    return func(*args, **kwargs)

                return wrapper

            return data_func

        return get


class Request(metaclass=_Request):

    @staticmethod
    def doc(src, des, cls=None, src_none_allowed=False):
        '''
        `doc_required` for views: a missing document answers 404, a
        malformed key answers 400
        '''

        def deco(func):
            loader = doc_required(src, des, cls, src_none_allowed)(func)

            @wraps(func)
            def wrapper(*args, **ks):
                try:
                    return loader(*args, **ks)
                except engine.DoesNotExist as e:
                    return HTTPError(str(e), 404)
                except engine.ValidationError as e:
                    current_app.logger.info(
                        f'Validation error [err={e.to_dict()}]')
                    return HTTPError('Invalid parameter', 400)

            return wrapper

        return deco
