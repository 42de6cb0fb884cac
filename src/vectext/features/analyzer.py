from typing import AbstractSet, List, Tuple

from vectext.features.ngrams import expand_ngrams
from vectext.features.text import Preprocessor, Tokenizer


class Analyzer:
    """
    Turns one document into its ordered list of terms:
    preprocess -> tokenize -> n-gram expansion -> stop-word filter.

    Shared by vocabulary building and count encoding so both see the same terms.
    """

    def __init__(
        self,
        preprocessor: Preprocessor,
        tokenizer: Tokenizer,
        ngram_range: Tuple[int, int] = (1, 1),
        stop_words: AbstractSet[str] = frozenset(),
    ):
        self.preprocessor = preprocessor
        self.tokenizer = tokenizer
        self.ngram_range = ngram_range
        self.stop_words = frozenset(stop_words)

    def __call__(self, document: str) -> List[str]:
        text = self.preprocessor.normalize(document)
        tokens = self.tokenizer.tokenize(text)
        terms = expand_ngrams(tokens, self.ngram_range)

        if self.stop_words:
            terms = [term for term in terms if term not in self.stop_words]
        return terms

    def __repr__(self):
        return (
            f"Analyzer(preprocessor={self.preprocessor!r}, tokenizer={self.tokenizer!r}, "
            f"ngram_range={self.ngram_range}, stop_words={len(self.stop_words)})"
        )
