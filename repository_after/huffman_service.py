# // filename: huffman_service.py

from huffman_core import (
    CorruptStreamError,
    EmptyInputError,
    HuffmanLogic,
    TruncatedInputError,
    UnknownSymbolError,
)


class HuffmanService:
    def __init__(self):
        self.logic = HuffmanLogic()

    def build_code_table(self, data):
        if not data:
            raise EmptyInputError()
        freqs = self.logic.count_frequencies(data)
        return self.logic.build_code_table(freqs)

    def compress(self, data, table):
        codes = table.codes
        out = bytearray()
        buffer = 0
        buffer_len = 0

        for symbol in data:
            code = codes.get(symbol)
            if code is None:
                raise UnknownSymbolError(symbol)
            buffer = (buffer << code.length) | code.value
            buffer_len += code.length

            # Flush every whole byte, most significant bits first
            while buffer_len >= 8:
                buffer_len -= 8
                out.append((buffer >> buffer_len) & 0xFF)
            buffer &= (1 << buffer_len) - 1

        if buffer_len > 0:
            out.append((buffer << (8 - buffer_len)) & 0xFF)
        return bytes(out)

    def decompress(self, compressed, table, expected_symbol_count):
        if expected_symbol_count < 0:
            raise ValueError("expected_symbol_count must not be negative")

        out = bytearray()
        if expected_symbol_count == 0:
            return bytes(out)

        lookup = table.decode_map.get
        max_len = table.max_code_length
        value = 0
        length = 0

        for byte in compressed:
            for shift in range(7, -1, -1):
                value = (value << 1) | ((byte >> shift) & 1)
                length += 1

                symbol = lookup((value, length))
                if symbol is not None:
                    out.append(symbol)
                    if len(out) == expected_symbol_count:
                        return bytes(out)
                    value = 0
                    length = 0
                elif length >= max_len:
                    raise CorruptStreamError(
                        f"bit run {value:0{length}b} matches no code "
                        f"after {len(out)} symbols"
                    )

        raise TruncatedInputError(expected_symbol_count, len(out))


_default_service = HuffmanService()


def build_code_table(data):
    return _default_service.build_code_table(data)


def compress(data, table):
    return _default_service.compress(data, table)


def decompress(compressed, table, expected_symbol_count):
    return _default_service.decompress(compressed, table, expected_symbol_count)


def compression_ratio(original, compressed):
    if not compressed:
        return float("inf") if original else 1.0
    return len(original) / len(compressed)
