from enum import Enum, Flag


class Compliant(Flag):
    '''It indicates which degree of compliantness the data must reflect the format'''
    NONE  = 0
    MAGIC = 1 << 1
    INHERIT = 1 << 2


class FileEntryType(Enum):
    '''Discriminator preceding each entry of a directory.'''
    FILE         = 0
    SUBDIRECTORY = 1
    END          = 2
