import logging

import pytest

from mlocatedb.core import Chunk
from mlocatedb.enum import Compliant
from mlocatedb.exceptions import MagicException, UnpackException
from mlocatedb.fields import StructField, StringField, CStringField, Endianess
from mlocatedb.meta import Meta
from mlocatedb.properties import Dependency


def test_meta():
    class Dummy(Chunk):
        field = StructField('i')

    class Dummy2(Chunk):
        field2 = StructField('i')

    d = Dummy()
    d2 = Dummy2()

    assert isinstance(d._meta, Meta)
    assert d.get_ordered_fields_name() == ['field']
    assert isinstance(d.field, StructField)
    assert d2.get_ordered_fields_name() == ['field2']


def test_class_access_returns_prototype():
    class Dummy(Chunk):
        field = StructField('I', endianess=Endianess.BIG_ENDIAN)

    prototype = Dummy.field
    dummy = Dummy(b'\x00\x00\x00\x2a')

    assert isinstance(prototype, StructField)
    assert prototype.name == 'field'
    assert prototype.father is None
    assert prototype.get_format() == '>I'

    assert dummy.field is not prototype
    assert dummy.field is dummy.field
    assert dummy.field.value == 0x2a
    assert prototype.value == 0


def test_inherited_field_cannot_be_redefined():
    class Father(Chunk):
        field = StructField('I')

    with pytest.raises(AttributeError):
        class Son(Father):
            field = StructField('B')


def test_chunk():
    """Check that building a Chunk from fields behaves correctly."""
    class Dummy(Chunk):
        a = StructField('I')
        b = StringField(0x10)
        c = StructField('I', endianess=Endianess.BIG_ENDIAN)

    data = b'\xad\x0b\x00\x00' + b'A' * 0x10 + b'\xde\xad\xbe\xef'
    dummy = Dummy(data)

    assert dummy.a.value == 0xbad
    assert dummy.a.offset == 0x00
    assert dummy.a.father is dummy

    assert dummy.b.value == b'A' * 0x10
    assert dummy.b.offset == 0x04

    assert dummy.c.value == 0xdeadbeef
    assert dummy.c.offset == 0x14

    assert dummy.size == 0x18
    assert dummy.layout == {
        'a': (0x00, 4),
        'b': (0x04, 0x10),
        'c': (0x14, 4),
    }


def test_chunk_instances_are_independent():
    class Dummy(Chunk):
        a = StructField('B')

    first = Dummy(b'\x01')
    second = Dummy(b'\x02')

    assert first.a is not second.a
    assert (first.a.value, second.a.value) == (1, 2)


def test_inheritance():
    '''subclasses inherit fields'''
    class Father(Chunk):
        field_a = StringField(0x10)
        field_b = StructField("I")

    class Son(Father):
        field_c = StringField(0x08)

    field_b_value = b'\x01\x02\x03\x04'
    field_c_value = b'ABCDEFGH'
    son = Son(b'A' * 16 + field_b_value + field_c_value)

    assert [_ for _, __ in son.get_fields()] == [
        'field_a', 'field_b', 'field_c',
    ]

    assert son.field_b.value == 0x04030201
    assert son.field_c.value == field_c_value


def test_chunk_w_dependencies():
    class Example(Chunk):
        sz = StructField('B')
        data = StringField(Dependency('.sz'))
        trailer = CStringField()

    example = Example(b'\x05kebabmiao\x00')

    assert list(example.get_dependencies().keys()) == [
        'data.length',
    ]

    assert example.sz.father is example
    assert example.data.value == b'kebab'
    assert example.trailer.value == 'miao'
    assert example.size == 1 + 5 + 5


def test_nested_chunks():
    class Inner(Chunk):
        x = StructField('B')
        y = StructField('B')

    class Outer(Chunk):
        head = StructField('B')
        inner = Inner()

    outer = Outer(b'\x01\x02\x03')

    assert outer.inner.x.value == 2
    assert outer.inner.y.offset == 2
    assert outer.inner.father is outer
    assert outer.inner.root is outer
    assert outer.isRoot
    assert not outer.inner.isRoot

    with pytest.raises(UnpackException) as excinfo:
        Outer(b'\x01\x02')

    assert excinfo.value.chain == ['y', 'inner']
    assert excinfo.value.path == 'inner.y'
    assert str(excinfo.value).startswith('inner.y: ')


class Magic(Chunk):
    magic = StringField(default=b'MZ')

    def validate(self):
        return self.magic.value == b'MZ'


def test_validate_compliant():
    with pytest.raises(MagicException):
        Magic(b'ZM', compliant=Compliant.MAGIC)

    assert Magic(b'MZ', compliant=Compliant.MAGIC).magic.value == b'MZ'


def test_validate_not_compliant(caplog):
    with caplog.at_level(logging.WARNING):
        chunk = Magic(b'ZM', compliant=Compliant.NONE)

    assert chunk.magic.value == b'ZM'
    assert 'validation for chunk \'Magic\' failed' in caplog.text


def test_validate_inherits_compliance():
    class Container(Chunk):
        magic = Magic()

    with pytest.raises(MagicException) as excinfo:
        Container(b'ZM', compliant=Compliant.MAGIC)

    assert excinfo.value.chain == ['magic']

    assert Container(b'ZM', compliant=Compliant.NONE).magic.magic.value == b'ZM'
