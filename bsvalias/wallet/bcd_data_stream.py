import struct
from io import BytesIO

from bsvalias.error import SerializationError


class BCDataStream:
    """ Bitcoin wire format reader / writer. Reads never return short data. """

    int32 = struct.Struct('<i')
    uint8 = struct.Struct('B')
    uint16 = struct.Struct('<H')
    uint32 = struct.Struct('<I')
    uint64 = struct.Struct('<Q')

    def __init__(self, data=None):
        self.data = BytesIO(data)

    def get_bytes(self):
        return self.data.getvalue()

    @property
    def remaining(self) -> int:
        return len(self.data.getvalue()) - self.data.tell()

    def read(self, size):
        # size may come off the wire as a uint64, check it before BytesIO sees it
        remaining = self.remaining
        if size > remaining:
            raise SerializationError(
                f'unexpected end of data, wanted {size} bytes but only {remaining} available'
            )
        return self.data.read(size)

    def write(self, data):
        self.data.write(data)

    def read_string(self):
        return self.read(self.read_compact_size())

    def write_string(self, s):
        self.write_compact_size(len(s))
        self.write(s)

    def read_compact_size(self):
        size = self.read_uint8()
        if size < 253:
            return size
        if size == 253:
            return self.read_uint16()
        if size == 254:
            return self.read_uint32()
        return self.read_uint64()

    def write_compact_size(self, size):
        if size < 253:
            self.write_uint8(size)
        elif size <= 0xFFFF:
            self.write_uint8(253)
            self.write_uint16(size)
        elif size <= 0xFFFFFFFF:
            self.write_uint8(254)
            self.write_uint32(size)
        else:
            self.write_uint8(255)
            self.write_uint64(size)

    def _read_struct(self, fmt):
        return fmt.unpack(self.read(fmt.size))[0]

    def read_int32(self):
        return self._read_struct(self.int32)

    def read_uint8(self):
        return self._read_struct(self.uint8)

    def read_uint16(self):
        return self._read_struct(self.uint16)

    def read_uint32(self):
        return self._read_struct(self.uint32)

    def read_uint64(self):
        return self._read_struct(self.uint64)

    def write_int32(self, val):
        self.write(self.int32.pack(val))

    def write_uint8(self, val):
        self.write(self.uint8.pack(val))

    def write_uint16(self, val):
        self.write(self.uint16.pack(val))

    def write_uint32(self, val):
        self.write(self.uint32.pack(val))

    def write_uint64(self, val):
        self.write(self.uint64.pack(val))

    def ensure_consumed(self):
        if self.remaining:
            raise SerializationError(f'{self.remaining} unexpected trailing bytes')
