'''
# Configuration block

Records the updatedb parameters that were used to build the database, so that
a database is not reused if some configuration change could affect its contents.

Each parameter is stored as its name followed by its values, everything
NUL-terminated, with an additional NUL closing the list of values

    prunefs \x00 9P \x00 AFS \x00 \x00 prunenames \x00 .git \x00 \x00 ...

Only the parameters listed in PARAMETERS are kept, the others are
ignored so that blocks written by newer versions can still be read.
'''
import logging

from ..exceptions import TruncatedBufferException
from ..fields import Field
from ..properties import ChunkPhase, PropertyDescriptor


logger = logging.getLogger(__name__)


# on-disk name -> attribute of Configuration
PARAMETERS = {
    'prune_bind_mounts': 'prune_bind_mounts',  # a single entry, "0" or "1"
    'prunefs':           'prune_fs',
    'prunenames':        'prune_names',
    'prunepaths':        'prune_paths',
}


class Configuration(object):
    '''Values of the known parameters, in the order they are stored.

    The values are not normalized: updatedb stores PRUNEFS uppercase and sorts
    the lists, but this is a concern of whoever compares configurations.'''

    def __init__(self, **values):
        for name, attribute in PARAMETERS.items():
            setattr(self, attribute, list(values.pop(attribute, [])))

        if values:
            raise TypeError(f'unknown parameters: {", ".join(sorted(values))}')

    def __getitem__(self, name):
        '''Lookup by the name used on disk (e.g. "prunefs").'''
        return getattr(self, PARAMETERS[name])

    def __iter__(self):
        for name, attribute in PARAMETERS.items():
            yield name, getattr(self, attribute)

    def __eq__(self, other):
        if not isinstance(other, Configuration):
            return NotImplemented

        return list(self) == list(other)

    def __repr__(self):
        msg = ', '.join(f'{attribute}={getattr(self, attribute)!r}' for attribute in PARAMETERS.values())
        return f'<{self.__class__.__name__}({msg})>'


def parse_configuration(raw: bytes, encoding='utf-8', errors='surrogateescape') -> Configuration:
    values = {}

    for record in raw.split(b'\x00\x00'):
        name, *parameters = record.split(b'\x00')
        name = name.decode(encoding, errors)

        if name not in PARAMETERS:
            if name:
                logger.debug('ignoring unknown configuration parameter \'%s\'' % name)
            continue

        values[PARAMETERS[name]] = [_.decode(encoding, errors) for _ in parameters]

    return Configuration(**values)


class ConfigurationField(Field):
    '''The configuration block: its length is not contained in the block
    itself, pass it as an int or as a Dependency.'''

    length = PropertyDescriptor('length', int)

    def __init__(self, n, encoding='utf-8', errors='surrogateescape', **kw):
        self.length = n
        self.encoding = encoding
        self.errors = errors
        self.raw = b''
        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def value_from_default(self):
        return Configuration()

    def _get_size(self):
        return len(self.raw)

    def unpack(self, stream):
        self._phase = ChunkPhase.UNPACKING

        length = self.length
        if length > stream.remaining():
            raise TruncatedBufferException(
                chain=[],
                msg=f'configuration block of {length} bytes at offset {stream.tell()} exceeds the {stream.remaining()} bytes available')

        self.raw = stream.read_exactly(length)
        self.value = parse_configuration(self.raw, self.encoding, self.errors)

        self._phase = ChunkPhase.DONE
