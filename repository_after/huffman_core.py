# filename: huffman_core.py

import heapq
from collections import Counter
from itertools import count
from types import MappingProxyType


class HuffmanError(Exception):
    """Base class for every error raised by the Huffman coder."""


class EmptyInputError(HuffmanError, ValueError):
    def __init__(self, message="cannot build a Huffman code from empty input"):
        super().__init__(message)


class UnknownSymbolError(HuffmanError, KeyError):
    def __init__(self, symbol):
        self.symbol = symbol
        super().__init__(f"symbol {symbol!r} has no code in this table")

    def __str__(self):
        # KeyError would repr() the message
        return self.args[0]


class TruncatedInputError(HuffmanError, EOFError):
    def __init__(self, expected, decoded):
        self.expected = expected
        self.decoded = decoded
        super().__init__(
            f"compressed buffer exhausted after {decoded} of {expected} symbols"
        )


class CorruptStreamError(HuffmanError, ValueError):
    pass


class InvalidFrequencyError(HuffmanError, ValueError):
    pass


class InvariantViolationError(HuffmanError, AssertionError):
    pass


class HuffmanNode:
    def __init__(self, symbol, weight, left=None, right=None):
        self.symbol = symbol
        self.weight = weight
        self.left = left
        self.right = right

    def is_leaf(self):
        return self.left is None and self.right is None

    def __repr__(self):
        if self.is_leaf():
            return f"HuffmanNode(symbol={self.symbol!r}, weight={self.weight})"
        return f"HuffmanNode(weight={self.weight})"


class HuffmanCode:
    """A code packed as an integer value plus a bit length.

    The first bit of the code is the most significant bit of ``value``.
    """

    __slots__ = ("value", "length")

    def __init__(self, value=0, length=0):
        self.value = value
        self.length = length

    def push(self, bit):
        return HuffmanCode((self.value << 1) | bit, self.length + 1)

    def bits(self):
        return [(self.value >> (self.length - i - 1)) & 1 for i in range(self.length)]

    def key(self):
        return (self.value, self.length)

    def startswith(self, other):
        if other.length > self.length:
            return False
        return self.value >> (self.length - other.length) == other.value

    def __eq__(self, other):
        if not isinstance(other, HuffmanCode):
            return NotImplemented
        return self.key() == other.key()

    def __hash__(self):
        return hash(self.key())

    def __len__(self):
        return self.length

    def __str__(self):
        if self.length == 0:
            return ""
        return format(self.value, f"0{self.length}b")

    def __repr__(self):
        return f"HuffmanCode({str(self)!r})"


class CodeTable:
    """Read-only symbol to code mapping produced by the code assigner.

    Besides the forward mapping it keeps the frequency table it was derived
    from and an inverse ``(value, length) -> symbol`` lookup for decoding.
    """

    def __init__(self, codes, frequencies):
        self._codes = MappingProxyType(dict(codes))
        self._frequencies = MappingProxyType(dict(frequencies))
        self._decode_map = MappingProxyType(
            {code.key(): symbol for symbol, code in self._codes.items()}
        )
        self.max_code_length = max((c.length for c in self._codes.values()), default=0)

    @classmethod
    def from_frequencies(cls, frequencies):
        for symbol, freq in frequencies.items():
            if not isinstance(symbol, int) or not 0 <= symbol <= 255:
                raise InvalidFrequencyError(f"symbol {symbol!r} is not a byte value")
            if not isinstance(freq, int) or freq <= 0:
                raise InvalidFrequencyError(f"symbol {symbol!r} has count {freq!r}, expected a positive integer")
        logic = HuffmanLogic()
        return logic.build_code_table(frequencies)

    @property
    def codes(self):
        return self._codes

    @property
    def frequencies(self):
        return self._frequencies

    @property
    def decode_map(self):
        return self._decode_map

    def lookup(self, value, length):
        return self._decode_map.get((value, length))

    def encoded_bit_length(self):
        return sum(self._codes[s].length * n for s, n in self._frequencies.items())

    def is_prefix_free(self):
        codes = list(self._codes.values())
        for i, a in enumerate(codes):
            for b in codes[i + 1:]:
                if a.startswith(b) or b.startswith(a):
                    return False
        return True

    def __getitem__(self, symbol):
        try:
            return self._codes[symbol]
        except KeyError:
            raise UnknownSymbolError(symbol) from None

    def __contains__(self, symbol):
        return symbol in self._codes

    def __iter__(self):
        return iter(self._codes)

    def __len__(self):
        return len(self._codes)

    def __eq__(self, other):
        if not isinstance(other, CodeTable):
            return NotImplemented
        return dict(self._codes) == dict(other._codes)

    __hash__ = None

    def __repr__(self):
        inner = ", ".join(f"{s!r}: {str(c)!r}" for s, c in sorted(self._codes.items()))
        return f"CodeTable({{{inner}}})"


class HuffmanLogic:
    def count_frequencies(self, data):
        # Frequency analysis of the input byte data
        return Counter(data)

    def build_tree(self, frequencies):
        if not frequencies:
            raise EmptyInputError()

        # Leaves go in by symbol so equal weights always merge in the same order
        sequence = count()
        priority_queue = [
            (freq, next(sequence), HuffmanNode(symbol, freq))
            for symbol, freq in sorted(frequencies.items())
        ]
        heapq.heapify(priority_queue)

        # Iteratively merge nodes to form the binary tree
        while len(priority_queue) > 1:
            _, _, left = heapq.heappop(priority_queue)
            _, _, right = heapq.heappop(priority_queue)
            merged = HuffmanNode(None, left.weight + right.weight, left, right)
            heapq.heappush(priority_queue, (merged.weight, next(sequence), merged))

        return priority_queue[0][2]

    def generate_codes(self, node, current_code=None, codes=None):
        if codes is None:
            codes = {}
        if current_code is None:
            current_code = HuffmanCode()
        if node.is_leaf():
            # A lone root leaf still needs one bit per symbol
            codes[node.symbol] = current_code if current_code.length else HuffmanCode(0, 1)
            return codes
        self.generate_codes(node.left, current_code.push(0), codes)
        self.generate_codes(node.right, current_code.push(1), codes)
        return codes

    def build_code_table(self, frequencies):
        root = self.build_tree(frequencies)
        codes = self.generate_codes(root)
        if len(codes) != len(frequencies):
            raise InvariantViolationError(
                f"code table has {len(codes)} entries for {len(frequencies)} symbols"
            )
        return CodeTable(codes, frequencies)
