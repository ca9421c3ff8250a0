class MlocateException(Exception):
    '''Base class to extend in order to throw exception in mlocatedb.

    It takes as first argument the chain of the layers that caused the
    exception, innermost first: each chunk the exception passes through
    appends the name of the failing field.
    '''

    def __init__(self, chain, msg=''):
        self.chain = chain
        self.msg = msg
        super().__init__(msg)

    @property
    def path(self):
        return '.'.join(reversed(self.chain))

    def __str__(self):
        if not self.chain:
            return self.msg

        return f'{self.path}: {self.msg}'


class UnpackException(MlocateException):
    pass


class MalformedHeaderException(UnpackException):
    pass


class MagicException(MalformedHeaderException):
    pass


class TruncatedBufferException(UnpackException):
    pass


class MalformedDirectoryException(UnpackException):
    pass


class InvalidTypeException(MlocateException):
    '''Raised when a file entry's discriminator is asked for its label
    but it's not one of the known values.'''
    pass
