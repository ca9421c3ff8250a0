'''
# Directory contents

After its path, each directory record contains the list of its direct children:
every entry is one discriminator byte followed by the NUL-terminated name

    \x00 name \x00   non-directory file
    \x01 name \x00   subdirectory

and the list is closed by a single \x02 byte (end of directory).

The discriminator is stored as it is found: only asking for its label
with FileEntry.type() checks it's one of the known values.
'''
from enum import Enum, auto

from ..enum import FileEntryType
from ..exceptions import InvalidTypeException, MalformedDirectoryException
from ..fields import Field
from ..properties import ChunkPhase


TYPE_LABELS = {
    FileEntryType.FILE: 'file',
    FileEntryType.SUBDIRECTORY: 'subdirectory',
    FileEntryType.END: 'end',
}

END_OF_DIRECTORY = FileEntryType.END.value


class FileEntry(object):
    '''A single child of a directory.'''

    def __init__(self, kind, name, encoding='utf-8', errors='surrogateescape'):
        self.kind = kind  # raw discriminator, not validated
        self.raw = name
        self.name = name.decode(encoding, errors)

    def __repr__(self):
        return f'<{self.__class__.__name__}(kind={self.kind}, name={self.name!r})>'

    def __eq__(self, other):
        if not isinstance(other, FileEntry):
            return NotImplemented

        return self.kind == other.kind and self.raw == other.raw

    def get_type(self) -> FileEntryType:
        try:
            return FileEntryType(self.kind)
        except ValueError:
            raise InvalidTypeException(chain=[], msg=f'invalid file type specification 0x{self.kind:02x} for {self.name!r}') from None

    def type(self) -> str:
        '''Human friendly representation of the entry's type: "file", "subdirectory" or "end".'''
        return TYPE_LABELS[self.get_type()]

    @property
    def is_directory(self):
        return self.kind == FileEntryType.SUBDIRECTORY.value


class FileSequenceState(Enum):
    AWAITING_DISCRIMINATOR = auto()
    ACCUMULATING_NAME      = auto()


class FileSequenceField(Field):
    '''The entries of a directory, up to and including the end of directory byte.

    The bytes are consumed by a small state machine:

     - waiting for a discriminator, the end of directory byte terminates the
       sequence, any other byte becomes the discriminator of a new entry
     - accumulating the name, NUL emits the entry, the end of directory byte
       terminates the sequence dropping the partial name
    '''

    def __init__(self, encoding='utf-8', errors='surrogateescape', **kw):
        self.encoding = encoding
        self.errors = errors
        self._size = 0
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
        return []

    def _get_size(self):
        return self._size

    def unpack(self, stream):
        self._phase = ChunkPhase.UNPACKING

        start = stream.tell()
        data = stream.data
        entries = []

        state = FileSequenceState.AWAITING_DISCRIMINATOR
        kind = None
        name = bytearray()

        for position in range(start, stream.length):
            byte = data[position]

            if state is FileSequenceState.AWAITING_DISCRIMINATOR:
                if byte == END_OF_DIRECTORY:
                    break

                kind = byte
                state = FileSequenceState.ACCUMULATING_NAME
            elif byte == 0:
                entries.append(FileEntry(kind, bytes(name), self.encoding, self.errors))
                name = bytearray()
                state = FileSequenceState.AWAITING_DISCRIMINATOR
            elif byte == END_OF_DIRECTORY:
                self.logger.debug('end of directory inside the name of an entry at offset %d, dropping %r' % (position, bytes(name)))
                break
            else:
                name.append(byte)
        else:
            raise MalformedDirectoryException(chain=[], msg=f'no end of directory marker after offset {start}')

        stream.seek(position + 1)

        self._size = position + 1 - start
        self.value = entries
        self._phase = ChunkPhase.DONE
