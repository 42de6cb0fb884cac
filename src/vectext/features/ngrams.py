from typing import Any, List, Sequence, Tuple


def expand_ngrams(tokens: Sequence[str], ngram_range: Tuple[int, int]) -> List[str]:
    """
    Expand a token sequence into space-joined n-grams.

    Output is grouped by n in ascending order (all unigrams, then all bigrams, ...),
    each group in left-to-right document order. Fewer tokens than min_n gives [].
    """
    min_n, max_n = ngram_range
    tokens = list(tokens)
    n_tokens = len(tokens)

    if min_n == max_n == 1:
        return tokens

    return [
        " ".join(tokens[i:i + n])
        for n in range(min_n, min(max_n, n_tokens) + 1)
        for i in range(n_tokens - n + 1)
    ]


def unigrams(tokens: Sequence[str]) -> List[str]:
    return expand_ngrams(tokens, (1, 1))


def bigrams(tokens: Sequence[str]) -> List[str]:
    return expand_ngrams(tokens, (2, 2))


def trigrams(tokens: Sequence[str]) -> List[str]:
    return expand_ngrams(tokens, (3, 3))


def ngrams(tokens: Sequence[str], n: int) -> List[str]:
    return expand_ngrams(tokens, (n, n))


def pad_sequence(
    sequence: Sequence[Any],
    n: int,
    pad_left: bool = False,
    pad_right: bool = False,
    left_pad_symbol: Any = None,
    right_pad_symbol: Any = None,
) -> List[Any]:
    """
    Pad a sequence with n - 1 symbols on each requested side, as used before
    extracting n-grams that mark sentence boundaries.

    >>> pad_sequence([1, 2, 3], 2, pad_left=True, left_pad_symbol='<s>')
    ['<s>', 1, 2, 3]
    """
    padding = max(n - 1, 0)
    left = [left_pad_symbol] * padding if pad_left else []
    right = [right_pad_symbol] * padding if pad_right else []
    return left + list(sequence) + right
