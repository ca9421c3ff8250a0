import io

from .exceptions import UnpackException


class Stream(object):
    '''This is a simple wrapper around an in-memory buffer to
    uniform its properties: mainly we need to know how many bytes
    are left and to read NUL-terminated strings.

    The buffer is never modified.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)
        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of object to use as a stream' % self._type.__name__)

        init_method()

        self.length = len(self.data)

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __repr__(self):
        return '<%s(%d/%d)>' % (self.__class__.__name__, self.tell(), self.length)

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.data = self.obj
        self.obj = io.BytesIO(self.data)

    def init_bytearray(self):
        self.data = bytes(self.obj)
        self.obj = io.BytesIO(self.data)

    def init_memoryview(self):
        self.data = self.obj.tobytes()
        self.obj = io.BytesIO(self.data)

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        self.obj.seek(offset)

    def remaining(self):
        return self.length - self.tell()

    def read_exactly(self, n):
        '''Read n bytes or raise UnpackException if the buffer ends before.'''
        data = self.obj.read(n)
        if len(data) != n:
            raise UnpackException(chain=[], msg=f'expected {n} bytes at offset {self.tell() - len(data)}, got {len(data)}')

        return data

    def read_until(self, delimiter=b'\x00'):
        '''Return the bytes up to the delimiter (excluded) and move past it.'''
        start = self.tell()
        end = self.data.find(delimiter, start)

        if end < 0:
            raise UnpackException(chain=[], msg=f'no terminator {delimiter!r} after offset {start}')

        self.obj.seek(end + len(delimiter))

        return self.data[start:end]

    def read_all(self):
        return self.obj.read()

