import logging
from flask import current_app

from . import engine

__all__ = ['MongoBase']


class MongoBase:
    '''
    Thin wrapper around a mongoengine document.

    Attribute access falls through to the wrapped document (`obj`), so a
    wrapper can be used wherever the document is expected. A wrapper built
    from a primary key that does not exist is falsy.
    '''

    def __init_subclass__(cls, engine, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.engine = engine

    def __new__(cls, pk, *args, **kwargs):
        new = super().__new__(cls)
        if isinstance(pk, MongoBase):
            pk = pk.obj
        # got a document, wrap it directly
        if isinstance(pk, new.engine):
            obj = pk
        else:
            try:
                obj = new.engine.objects(pk=pk).first()
            except engine.ValidationError:
                obj = None
        object.__setattr__(new, 'obj', obj)
        object.__setattr__(new, '_pk', obj.pk if obj is not None else pk)
        return new

    def __getattr__(self, name):
        if name in ('obj', '_pk'):
            raise AttributeError(name)
        return getattr(self.obj, name)

    def __setattr__(self, name, value):
        if name == 'obj':
            object.__setattr__(self, name, value)
        else:
            setattr(self.obj, name, value)

    def __eq__(self, other):
        if isinstance(other, MongoBase):
            other = other.obj
        return self.obj is not None and self.obj == other

    def __hash__(self):
        return hash((type(self), self._pk))

    def __bool__(self):
        return self.obj is not None

    def __str__(self):
        return f'{self.engine.__name__.lower()} [{self._pk}]'

    def __repr__(self):
        return f'<{self}>'

    @property
    def logger(self) -> logging.Logger:
        try:
            return current_app.logger
        except RuntimeError:
            return logging.getLogger(type(self).__module__)
