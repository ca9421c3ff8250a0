#!/usr/bin/env python3
import sys
import os
import logging

from mlocatedb.enum import Compliant
from mlocatedb.exceptions import MlocateException
from mlocatedb.mlocate import decode

if 'DEBUG' in os.environ:
    logging.basicConfig()
    logger = logging.getLogger('mlocatedb')
    logger.setLevel(logging.DEBUG)


def usage(progname):
    print('usage: %s [--paths] [--force] <mlocate.db>' % progname)
    sys.exit(1)


def dump_header(hdr):
    print(f'''mlocate Header:
  Magic:                             {hdr.magic.value.hex()}
  Configuration block size:          {hdr.conf_size.value} (bytes)
  Version:                           {hdr.version.value}
  Require visibility:                {hdr.visibility_required}
  Database path:                     {hdr.database_path.value}''')


def dump_configuration(configuration):
    print('Configuration:')
    for name, values in configuration:
        print(f'''  {name:<34} {" ".join(values)}''')


def dump_directories(directories):
    print(f'''Directories ({len(directories)} entries):
  Offset     Time                           Entries  Path''')
    for directory in directories:
        print(f'''  0x{directory.offset:08x} {directory.dir_time_seconds.value:>19}.{directory.dir_time_nanos.value:09d} {len(directory.files):>8}  {directory.path.value}''')


def dump_paths(db):
    for path in db.iter_paths():
        print(path)


if __name__ == '__main__':
    args = sys.argv[1:]
    show_paths = '--paths' in args
    force = '--force' in args
    args = [_ for _ in args if not _.startswith('--')]

    if len(args) != 1:
        usage(sys.argv[0])

    with open(args[0], 'rb') as f:
        data = f.read()

    try:
        db = decode(data, compliant=Compliant.NONE if force else Compliant.MAGIC)
    except MlocateException as e:
        print(f'{args[0]}: {e.__class__.__name__}: {e}', file=sys.stderr)
        sys.exit(2)

    if show_paths:
        dump_paths(db)
        sys.exit(0)

    dump_header(db.header)
    dump_configuration(db.configuration.value)
    dump_directories(db.directories)
