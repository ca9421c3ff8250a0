import pytest


CONFIGURATION_BLOCK = (
    b'prune_bind_mounts\x001\x00\x00'
    b'prunefs\x009P\x00AFS\x00\x00'
    b'prunenames\x00.git\x00.hg\x00.svn\x00\x00'
    b'prunepaths\x00/tmp\x00\x00'
)

DIRECTORY_ROOT = (
    b'\x00\x00\x00\x00\x57\xe7\x9a\xe0'  # 1474796256 s
    b'\x07\x63\x86\x13'                  # 123962899 ns
    b'\x00\x00\x00\x00'
    b'/\x00'
    b'\x00bin\x00\x01boot\x00\x02'
)

DIRECTORY_ETC = (
    b'\x00\x00\x00\x00\x61\x8c\x1e\xb2'  # 1636572850 s
    b'\x07\x5b\xcd\x15'                  # 123456789 ns
    b'\x00\x00\x00\x00'
    b'/etc\x00'
    b'\x00foo\x00\x01bar\x00\x02'
)


def _build_header(conf_size, root=b'/', magic=b'\x00mlocate', version=0, require_visibility=1):
    return (
        magic
        + conf_size.to_bytes(4, 'big')
        + bytes([version, require_visibility])
        + b'\x00\x00'
        + root + b'\x00'
    )


@pytest.fixture
def build_header():
    return _build_header


@pytest.fixture
def configuration_block():
    return CONFIGURATION_BLOCK


@pytest.fixture
def directory_root():
    return DIRECTORY_ROOT


@pytest.fixture
def database_bytes():
    return _build_header(len(CONFIGURATION_BLOCK)) + CONFIGURATION_BLOCK + DIRECTORY_ROOT + DIRECTORY_ETC
