"""
# mlocatedb: reading locate databases for humans.

A file format is described declaratively: a Chunk subclass lists its fields
as class attributes, in the order they appear in the binary data.

The main operation is

 1. unpack(): reading the binary data and build a high-level representation
    of that. When unpacking, each field starts at the actual offset of the
    stream and knows by itself how many bytes it needs to read; at the end
    its size is the number of bytes consumed.

There is no packing: the databases are only read.

An instance representing a file format can be in one of the following states

 1. INIT
 2. UNPACKING
 3. DONE

The mlocate format itself is in mlocatedb.mlocate, use

    from mlocatedb.mlocate import decode

    db = decode(data)
"""
