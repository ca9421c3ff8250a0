"""
A Field is "fundamental" datatype from the format point of view, something directly
unpackable from a stream without knowing anything about the fields that follow it.
"""
import logging
import struct
from typing import Dict

from .enum import Compliant
from .meta import FieldBase, Endianess
from .properties import Dependency, ChunkPhase, PropertyDescriptor
from .exceptions import MlocateException


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, *args, name=None, father=None, default=None, offset=None,
                 endianess=Endianess.LITTLE_ENDIAN, compliant=Compliant.INHERIT):
        super().__init__()
        self._phase = ChunkPhase.INIT
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset
        self.endianess = endianess
        self.compliant = compliant

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def get_dependencies(self) -> Dict[str, Dependency]:
        """Return the dictionary containing as key the attribute depending on other fields"""
        instance_dict = self.__dict__
        return {_k: _v for _k, _v in instance_dict.items() if isinstance(_v, Dependency)}

    def is_compliant(self, level):
        '''Returns True if this field, or an ancestor it inherits from, requires
        the given level of compliance.'''
        instance = self
        while instance is not None:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = instance.father

        return False

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module unpacking
    integers from bytes.
    """

    def __init__(self, format, default=0, **kw):
        self.format = format
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def get_format(self):
        return '%s%s' % (self.endianess.value, self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def unpack(self, stream):
        self._phase = ChunkPhase.UNPACKING
        raw = stream.read_exactly(self.size)
        self.value = struct.unpack(self.get_format(), raw)[0]
        self._phase = ChunkPhase.DONE


class StringField(Field):
    """Represent a contiguous chunk of bytes."""

    length = PropertyDescriptor('length', int)

    def __init__(self, n=None, **kw):
        if n is None and 'default' not in kw:
            raise ValueError(f"StringField must have 'n' or 'default' indicated!")

        self.length = n or len(kw['default'])

        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    def __len__(self):
        return self.length

    def value_from_default(self):
        if self.default:
            return self.default

        return b'\x00' * (self.length or 0)

    def _get_size(self):
        return self.length

    def unpack(self, stream):
        self._phase = ChunkPhase.UNPACKING
        self.value = stream.read_exactly(self.length)
        self._phase = ChunkPhase.DONE


class CStringField(Field):
    """A string terminated by a NUL byte.

    The value is the decoded string, the terminator is not part of it
    but it's counted in the size. With the default "surrogateescape" error
    handler the original bytes are recoverable with value.encode(encoding, errors).
    """

    def __init__(self, encoding='utf-8', errors='surrogateescape', **kw):
        self.encoding = encoding
        self.errors = errors
        self.raw = b''
        super().__init__(default='', **kw)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.value)

    def __len__(self):
        return len(self.raw)

    def _get_size(self):
        return len(self.raw) + 1

    def unpack(self, stream):
        self._phase = ChunkPhase.UNPACKING
        self.raw = stream.read_until(b'\x00')
        self.value = self.raw.decode(self.encoding, self.errors)
        self._phase = ChunkPhase.DONE


class ArrayField(Field):
    '''Unpack an array of Chunks.

    There is no explicit number of elements: "exhausted" is a callable receiving
    the stream that returns True when no more elements are present; it is
    checked before unpacking each element.

    This class behaves like a read-only list.
    '''

    def __init__(self, field_cls, exhausted, **kw):
        self.field_cls = field_cls
        self._exhausted = exhausted
        kw.setdefault('default', [])

        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __iter__(self):
        return iter(self.value)

    def __len__(self):
        return len(self.value)

    def value_from_default(self):
        return list(self.default)

    def _get_size(self):
        size = 0
        for element in self.value:
            size += element.size

        return size

    def instance_element(self):
        return self.field_cls.create(father=self)  # pass the father so that we don't lose the hierarchy

    def unpack(self, stream):
        self._phase = ChunkPhase.UNPACKING
        self.value = []

        while not self._exhausted(stream):
            idx = len(self.value)
            element = self.instance_element()

            self.logger.debug('unpacking element #%d of \'%s\' at offset %d' % (idx, self.name, stream.tell()))

            element.offset = stream.tell()
            try:
                element.unpack(stream)
            except MlocateException as e:
                e.chain.append(str(idx))
                raise

            self.value.append(element)

        self._phase = ChunkPhase.DONE

