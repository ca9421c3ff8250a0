"""
Machinery turning the class attributes of a Chunk into its ordered fields.
"""
import copy
import logging
from enum import Enum


logger = logging.getLogger(__name__)


class Endianess(Enum):
    '''The value is the byte order prefix of the struct module.'''
    LITTLE_ENDIAN = '<'
    BIG_ENDIAN    = '>'


class FieldDescriptor(object):
    """The field declared in the class body is a prototype: each chunk gets
    its own copy the first time the attribute is accessed."""

    def __init__(self, prototype: "Field", name: str):
        self.prototype = prototype
        self.prototype.name = name

    @property
    def name(self):
        return self.prototype.name

    def __get__(self, chunk, owner=None):
        if chunk is None:
            return self.prototype

        fields = chunk.__dict__
        if self.name not in fields:
            logger.debug("copying field '%s' for %s" % (self.name, chunk.__class__.__name__))
            fields[self.name] = self.prototype.create(father=chunk)

        return fields[self.name]


class FieldBase(object):

    def contribute_to_chunk(self, cls, name):
        cls._meta.add(name)
        setattr(cls, name, FieldDescriptor(self, name))

    def create(self, father):
        instance = copy.deepcopy(self)
        instance.father = father
        return instance


class Meta(object):
    """Names of the fields of a chunk class, in unpacking order.

    The fields of the parent chunks come first."""

    def __init__(self, parents=()):
        self.fields = []

        for parent in parents:
            for name in parent._meta.fields:
                self.add(name)

    def add(self, name):
        if name in self.fields:
            raise AttributeError(f"field '{name}' is already defined")

        self.fields.append(name)


class MetaChunk(type):

    def __new__(cls, names, bases, attrs):
        '''The fields are collected after the class is created, the descriptors
        of the parents are found through the usual attribute lookup.'''
        declared = {_k: _v for _k, _v in attrs.items() if isinstance(_v, FieldBase)}
        for name in declared:
            del attrs[name]

        new_cls = super(MetaChunk, cls).__new__(cls, names, bases, attrs)
        new_cls._meta = Meta(parents=[_ for _ in bases if isinstance(_, MetaChunk)])

        for name, field in declared.items():
            logger.debug('adding field \'%s\' to %s' % (name, names))
            field.contribute_to_chunk(new_cls, name)

        return new_cls
