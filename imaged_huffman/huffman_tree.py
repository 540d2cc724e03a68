"""
HuffmanTree

Builds an optimal prefix code from weighted symbols and uses it to encode symbol
sequences into bit lists and to decode bit lists back into symbols.

Nodes are kept in an arena (a list) and refer to their children by index, so a built
tree never hands out live node objects and can be shared between callers.
"""

import collections
import heapq
import logging

from imaged_huffman.errors import EmptyAlphabetError, MalformedStreamError
from imaged_huffman.errors import UninitializedTreeError, UnknownSymbolError
from imaged_huffman.frequency import count_symbols
from imaged_huffman.functions import as_bit_list, bits_to_str

logger = logging.getLogger(__name__)

# =============================================================================================== #
# Tree Nodes
# =============================================================================================== #

WeightedSymbol = collections.namedtuple('WeightedSymbol', 'weight symbol')

# left/right are arena indices, both None for a leaf.
Node = collections.namedtuple('Node', 'data left right')

SINGLE_SYMBOL_CODE = (0,)


def _normalize_weighted(weighted):
    if hasattr(weighted, 'items'):
        pairs = [(weight, symbol) for symbol, weight in weighted.items()]
    else:
        pairs = [(weight, symbol) for weight, symbol in weighted]

    seen = set()
    for weight, symbol in pairs:
        if symbol is None:
            raise ValueError("None is reserved for internal nodes and cannot be a symbol")
        if weight <= 0:
            raise ValueError(f"Weight of symbol {symbol!r} must be positive, got {weight!r}")
        if symbol in seen:
            raise ValueError(f"Symbol {symbol!r} given more than once")
        seen.add(symbol)
        pass
    return pairs


def _check_serialized_leaf(symbol, weight):
    if symbol is None:
        raise MalformedStreamError("Serialized tree has a leaf without symbol")
    try:
        hash(symbol)
    except TypeError:
        raise MalformedStreamError(f"Serialized tree has an unhashable symbol: {symbol!r}") from None
    if isinstance(weight, bool) or not isinstance(weight, (int, float)) or not weight > 0:
        raise MalformedStreamError(
            f"Serialized tree has an invalid weight for {symbol!r}: {weight!r}")
    pass

# =============================================================================================== #
# Huffman Tree
# =============================================================================================== #

class HuffmanTree(object):
    """Immutable Huffman code tree.

    An instance created with no arguments is empty: encode and decode raise
    `UninitializedTreeError` until a tree is obtained through `build`,
    `from_sequence` or `from_dict`.
    """

    def __init__(self, nodes = None, root = None):
        self._nodes = tuple(nodes) if nodes else ()
        self._root = root
        self._codes = self._assign_codes() if self._nodes else {}
        pass

    # --------------------------------------------- #
    # Construction
    # --------------------------------------------- #

    @classmethod
    def build(cls, weighted):
        """Build a tree from `(weight, symbol)` pairs or a symbol -> weight mapping.

        Ties on weight are broken by insertion order: leaves are numbered in input
        order and every merged node takes the next number, so the same input always
        yields the same tree.
        """
        pairs = _normalize_weighted(weighted)
        if len(pairs) == 0:
            raise EmptyAlphabetError("Cannot build a Huffman tree from an empty alphabet")

        nodes = []
        heap = []
        for weight, symbol in pairs:
            nodes.append(Node(WeightedSymbol(weight, symbol), None, None))
            heap.append((weight, len(nodes) - 1, len(nodes) - 1))
        heapq.heapify(heap)

        seq = len(nodes)
        while len(heap) > 1:
            w1, _, first = heapq.heappop(heap)
            w2, _, second = heapq.heappop(heap)
            nodes.append(Node(WeightedSymbol(w1 + w2, None), first, second))
            heapq.heappush(heap, (w1 + w2, seq, len(nodes) - 1))
            seq += 1
            pass

        tree = cls(nodes, heap[0][2])
        logger.debug('Built Huffman tree: %d leaves, %d nodes, root weight %s',
            len(pairs), len(nodes), tree.root_weight)
        return tree

    @classmethod
    def from_sequence(cls, sequence):
        return cls.build(count_symbols(sequence))

    @classmethod
    def from_dict(cls, data):
        """Rebuild a tree serialized by `to_dict`."""
        try:
            shape = data['shape']
            leaves = [(symbol, weight) for symbol, weight in data['leaves']]
        except (KeyError, TypeError, ValueError) as err:
            raise MalformedStreamError(f"Serialized tree is malformed: {err}") from err

        if not isinstance(shape, str) or shape == '' or shape.strip('01') != '':
            raise MalformedStreamError(f"Serialized tree shape is malformed: {shape!r}")
        if shape.count('1') != len(leaves):
            raise MalformedStreamError(
                f"Serialized tree has {shape.count('1')} leaf flags but {len(leaves)} leaves")
        for symbol, weight in leaves:
            _check_serialized_leaf(symbol, weight)

        # Walking pre-order backwards, both subtrees of a node are on the stack
        # (left on top) by the time the node itself is reached.
        nodes = []
        stack = []
        pending_leaves = list(leaves)
        for flag in reversed(shape):
            if flag == '1':
                symbol, weight = pending_leaves.pop()
                nodes.append(Node(WeightedSymbol(weight, symbol), None, None))
            else:
                if len(stack) < 2:
                    raise MalformedStreamError("Serialized tree shape is not a full binary tree")
                left = stack.pop()
                right = stack.pop()
                weight = nodes[left].data.weight + nodes[right].data.weight
                nodes.append(Node(WeightedSymbol(weight, None), left, right))
                pass
            stack.append(len(nodes) - 1)
            pass

        if len(stack) != 1:
            raise MalformedStreamError("Serialized tree shape leaves dangling subtrees")

        symbols = [symbol for symbol, _ in leaves]
        if len(set(symbols)) != len(symbols):
            raise MalformedStreamError("Serialized tree repeats a symbol")
        return cls(nodes, stack[0])

    def to_dict(self):
        """Serialize the tree as its pre-order shape plus leaves.

        `shape` holds one flag per node, '0' for an internal node and '1' for a leaf;
        `leaves` holds `[symbol, weight]` pairs in the same order.
        """
        self._check_built()
        shape = []
        leaves = []
        for index in self._pre_order():
            node = self._nodes[index]
            if node.left is None:
                shape.append('1')
                leaves.append([node.data.symbol, node.data.weight])
            else:
                shape.append('0')
                pass
            pass
        return {'shape': ''.join(shape), 'leaves': leaves}

    # --------------------------------------------- #
    # Traversal
    # --------------------------------------------- #

    def _pre_order(self):
        stack = [self._root]
        while stack:
            index = stack.pop()
            yield index
            node = self._nodes[index]
            if node.left is not None:
                stack.append(node.right)
                stack.append(node.left)
                pass
            pass
        pass

    def _assign_codes(self):
        root = self._nodes[self._root]
        if root.left is None:
            return {root.data.symbol: SINGLE_SYMBOL_CODE}

        codes = {}
        stack = [(self._root, ())]
        while stack:
            index, pat = stack.pop()
            node = self._nodes[index]
            if node.left is None:
                codes[node.data.symbol] = pat
                continue
            stack.append((node.right, pat + (1,)))
            stack.append((node.left, pat + (0,)))
            pass
        return codes

    def _check_built(self):
        if self._root is None:
            raise UninitializedTreeError("Huffman tree has not been built")
        pass

    @property
    def is_built(self):
        return self._root is not None

    @property
    def root_weight(self):
        self._check_built()
        return self._nodes[self._root].data.weight

    @property
    def codes(self):
        """Copy of the symbol -> code mapping."""
        return dict(self._codes)

    def nodes(self):
        """Yield `(index, WeightedSymbol, left, right)` for every node, root first."""
        for index in self._pre_order() if self.is_built else ():
            node = self._nodes[index]
            yield index, node.data, node.left, node.right
        pass

    def leaves(self):
        """Return `(symbol, weight, code)` triples in pre-order."""
        result = []
        for _, data, left, _ in self.nodes():
            if left is None:
                result.append((data.symbol, data.weight, self._codes[data.symbol]))
        return result

    def show_encoding(self, log = None):
        log = log or logger
        for symbol, weight, code in self.leaves():
            log.info('%r ---> %s (weight: %s)', symbol, bits_to_str(code), weight)
        pass

    def average_code_length(self):
        self._check_built()
        total = sum(weight * len(code) for _, weight, code in self.leaves())
        return total / self.root_weight

    def compressed_bits(self, counts):
        """Number of bits needed to encode a sequence with the given symbol counts."""
        self._check_built()
        return sum(count * len(self.encode_symbol(symbol)) for symbol, count in counts.items())

    # --------------------------------------------- #
    # Encoding & Decoding
    # --------------------------------------------- #

    def encode_symbol(self, symbol):
        self._check_built()
        try:
            return self._codes[symbol]
        except KeyError:
            raise UnknownSymbolError(symbol) from None
        except TypeError:
            # Unhashable values can never be part of the alphabet.
            raise UnknownSymbolError(symbol) from None

    def encode(self, sequence):
        """Concatenate the codes of `sequence`, in order, into a list of bits."""
        self._check_built()
        bits = []
        for symbol in sequence:
            bits.extend(self.encode_symbol(symbol))
        return bits

    def decode(self, bits):
        """Decode a list of bits (or a '0'/'1' string) back into symbols."""
        self._check_built()
        bits = as_bit_list(bits, MalformedStreamError)
        root = self._nodes[self._root]

        if root.left is None:
            if any(bits):
                raise MalformedStreamError("Single symbol stream may only hold 0 bits")
            return [root.data.symbol] * len(bits)

        decoded = []
        node = root
        for bit in bits:
            node = self._nodes[node.right if bit else node.left]
            if node.left is None:
                decoded.append(node.data.symbol)
                node = root
            pass

        if node is not root:
            raise MalformedStreamError(
                f"Stream of {len(bits)} bits ends in the middle of a code")
        return decoded

    def __len__(self):
        return len(self._codes)

    def __repr__(self):
        return f"{type(self).__name__}(symbols={len(self)}, nodes={len(self._nodes)})"
    pass
