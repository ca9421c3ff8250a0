'''
# mlocate database

Format of the database written by updatedb(8) and read by locate(1), described
in mlocate.db(5). All the integers are big-endian.

    .----------------------------------.
    | header (16 bytes)                |
    | root path (NUL-terminated)       |
    | configuration block              |
    | directory 1                      |
    |   file entries ... \x02          |
    | directory 2                      |
    |   file entries ... \x02          |
    | ...                              |
    '----------------------------------'

The directories are written in a depth-first pre-order walk of the indexed
tree; the format has no explicit count of them, they follow one after the
other until the end of the file.
'''
import logging

from ..core import Chunk
from ..enum import Compliant
from .. import fields
from ..exceptions import (
    UnpackException,
    MalformedHeaderException,
    MalformedDirectoryException,
)
from ..properties import Dependency
from .configuration import ConfigurationField
from .files import FileSequenceField


logger = logging.getLogger(__name__)


MAGIC = b'\x00mlocate'


class Header(Chunk):
    '''The configuration block starts at offset header.size, i.e. just after the
    root path.'''
    PROLOGUE_SIZE = 16

    magic              = fields.StringField(8, default=MAGIC)
    conf_size          = fields.StructField('I', endianess=fields.Endianess.BIG_ENDIAN)
    version            = fields.StructField('B')
    require_visibility = fields.StructField('B')
    padding            = fields.StringField(2)
    database_path      = fields.CStringField()

    def validate(self):
        return self.magic.value == MAGIC

    @property
    def visibility_required(self):
        return bool(self.require_visibility.value)

    def unpack(self, stream):
        if stream.remaining() < self.PROLOGUE_SIZE:
            raise MalformedHeaderException(
                chain=[],
                msg=f'header needs {self.PROLOGUE_SIZE} bytes, only {stream.remaining()} available')

        try:
            super().unpack(stream)
        except MalformedHeaderException:
            raise
        except UnpackException as e:
            raise MalformedHeaderException(chain=e.chain, msg=e.msg) from e


class DirectoryEntry(Chunk):
    '''A directory with its direct children.

    The time is the maximum of st_ctime and st_mtime of the directory.'''
    dir_time_seconds = fields.StructField('Q', endianess=fields.Endianess.BIG_ENDIAN)
    dir_time_nanos   = fields.StructField('I', endianess=fields.Endianess.BIG_ENDIAN)
    padding          = fields.StringField(4)
    path             = fields.CStringField()
    files            = FileSequenceField()

    def __str__(self):
        return self.path.value

    @property
    def time(self):
        return self.dir_time_seconds.value + self.dir_time_nanos.value / 1e9

    def unpack(self, stream):
        try:
            super().unpack(stream)
        except MalformedDirectoryException:
            raise
        except UnpackException as e:
            raise MalformedDirectoryException(chain=e.chain, msg=e.msg) from e


def is_exhausted(stream):
    return stream.remaining() < 2


class MlocateDB(Chunk):
    header        = Header()
    configuration = ConfigurationField(Dependency('header.conf_size'))
    directories   = fields.ArrayField(DirectoryEntry(), exhausted=is_exhausted)

    def __init__(self, data=None, compliant=Compliant.MAGIC, **kwargs):
        super().__init__(data, compliant=compliant, **kwargs)

    @property
    def index(self):
        '''Directories by path.'''
        return {_.path.value: _ for _ in self.directories}

    def iter_paths(self):
        '''Yield each directory path followed by the full paths of its entries,
        in the order they are stored.'''
        for directory in self.directories:
            dir_path = directory.path.value
            yield dir_path

            prefix = dir_path if dir_path.endswith('/') else dir_path + '/'
            for entry in directory.files:
                yield prefix + entry.name


def decode(data, compliant=Compliant.MAGIC) -> MlocateDB:
    '''Decode the whole content of a database.

    Any malformed part aborts the decoding. With compliant=Compliant.NONE a
    wrong magic is only logged and the decoding goes on.'''
    logger.debug('decoding database of %d bytes' % len(data))

    return MlocateDB(data, compliant=compliant)
