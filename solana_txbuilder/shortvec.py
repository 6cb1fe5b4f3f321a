"""Compact-u16 ("short vec") length prefix encoding"""

from typing import Tuple

from .errors import DecodeError, EncodingError

MAX_ENCODING_LENGTH = 3
MAX_VALUE = 0xffff


def encode_length(length: int) -> bytes:
    """Encode length as compact-u16"""
    if length < 0 or length > MAX_VALUE:
        raise EncodingError(f'Length {length} does not fit in compact-u16')

    result = []
    while length > 0x7f:
        result.append((length & 0x7f) | 0x80)
        length >>= 7
    result.append(length)
    return bytes(result)


def decode_length(data: bytes, offset: int = 0) -> Tuple[int, int]:
    """
    Decode a compact-u16 value starting at offset

    Returns:
        Tuple of (value, number of bytes consumed)

    Raises:
        DecodeError: on truncated, oversized or non-canonical input
    """
    value = 0
    for i in range(MAX_ENCODING_LENGTH):
        pos = offset + i
        if pos >= len(data):
            raise DecodeError('Truncated compact-u16 length')

        byte = data[pos]
        # third byte only carries the top two bits
        if i == MAX_ENCODING_LENGTH - 1 and byte > 0x03:
            raise DecodeError('Compact-u16 value overflows u16')

        value |= (byte & 0x7f) << (7 * i)

        if byte & 0x80 == 0:
            if i > 0 and byte == 0:
                raise DecodeError('Non-canonical compact-u16 encoding')
            return value, i + 1

    raise DecodeError('Compact-u16 length longer than 3 bytes')


class ByteReader:
    """Sequential reader over wire bytes"""

    def __init__(self, data: bytes, offset: int = 0):
        self.data = bytes(data)
        self.offset = offset

    def remaining(self) -> int:
        return len(self.data) - self.offset

    def read(self, size: int) -> bytes:
        if size > self.remaining():
            raise DecodeError(
                f'Unexpected end of data: need {size} bytes at offset {self.offset}, '
                f'{self.remaining()} left'
            )
        chunk = self.data[self.offset:self.offset + size]
        self.offset += size
        return chunk

    def read_u8(self) -> int:
        return self.read(1)[0]

    def read_length(self) -> int:
        value, consumed = decode_length(self.data, self.offset)
        self.offset += consumed
        return value

    def expect_end(self):
        if self.remaining():
            raise DecodeError(f'{self.remaining()} trailing bytes after offset {self.offset}')
