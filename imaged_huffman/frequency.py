from collections import Counter

# =============================================================================================== #
# Calculating Symbol Counts
# =============================================================================================== #


def count_symbols(sequence):
    """Map every distinct symbol of `sequence` to its number of occurrences."""
    return Counter(sequence)


def sorted_by_frequency(counts, reverse = False):
    """Return (symbol, count) pairs ordered by count.

    Ties keep the order in which symbols were first counted.
    """
    return sorted(counts.items(), key = lambda x: x[1], reverse = reverse)
