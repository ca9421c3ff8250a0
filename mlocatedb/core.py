"""
Core module for the abstraction of a file format

"""
from typing import Tuple, List, Dict

from .fields import Field
from .enum import Compliant
from .meta import MetaChunk
from .streams import Stream
from .exceptions import (
    MlocateException,
    MagicException,
)
from .properties import (
    get_root_from_chunk,
    Dependency,
    ChunkPhase,
)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: its main attributes
    are offset and size that identify a Chunk.

    A Chunk can contain sub-chunks: the order of the class attributes is the
    order the fields are read from the stream.

    Instances used as class attributes are prototypes, each instance of the
    containing chunk works on its own copy.
    """

    def __init__(self, data=None, **kwargs):
        self.stream = Stream(data) if data is not None else data
        super().__init__(**kwargs)

        # now we have setup all the fields necessary and we can unpack if
        # some data is passed with the constructor
        if self.stream is not None:
            self.logger.debug('unpacking \'%s\' from %s' % (self.__class__.__name__, self.stream))
            self.offset = 0
            self.unpack(self.stream)

    def init(self):
        # the fields are created lazily by their descriptors
        pass

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def get_dependencies(self) -> Dict[str, Dependency]:
        dep = super().get_dependencies()

        for field_name, field in self.get_fields():
            for key, value in field.get_dependencies().items():
                dep.update({f'{field_name}.{key}': value})

        return dep

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name in self._meta.fields:
            field = getattr(self, field_name)
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    @property
    def root(self):
        '''Obtain the final father of this chunk'''
        return get_root_from_chunk(self)

    @property
    def isRoot(self):
        return self.root is self

    def _get_size(self):
        '''the size MUST be derived from the subchunks'''
        size = 0
        for field_name in self._meta.fields:
            field = getattr(self, field_name)
            size += field.size

        return size

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def unpack(self, stream):
        '''This is one of the main APIs to take care of: its aim is to take a binary
        data and transform in the representation given by the class this method
        is implemented.

        The fields are read one after the other starting from the actual position
        of the stream: each one knows how many bytes needs to read, so at the end
        the stream is positioned just after this chunk.

        If the chunk defines a validate() method it's called at the end: a failure
        raises MagicException when the chunk is compliant with Compliant.MAGIC,
        otherwise it's only logged.
        '''
        self._phase = ChunkPhase.UNPACKING
        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s' % (self.__class__.__name__, field_name))

            field.offset = stream.tell()

            self.logger.debug('offset at %d' % stream.tell())

            try:
                field.unpack(stream)
            except MlocateException as e:
                e.chain.append(field_name)
                raise

        if hasattr(self, 'validate'):
            ret = self.validate()
            if not ret:
                self.logger.warning(f'validation for chunk \'{self.__class__.__name__}\' failed')
                if self.is_compliant(Compliant.MAGIC):
                    raise MagicException(chain=[], msg=f'{self.__class__.__name__} has a wrong magic')

        self._phase = ChunkPhase.DONE
