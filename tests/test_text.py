import pytest

from vectext.features.text import (
    CleanTextPreprocessor,
    FunctionTokenizer,
    LowercasePreprocessor,
    RegexTokenizer,
    StemmingTokenizer,
    WhitespaceTokenizer,
    as_preprocessor,
    as_tokenizer,
    create_preprocessor,
    create_tokenizer,
)


def test_lowercase_and_whitespace():
    text = LowercasePreprocessor().normalize("This IS  a\tTest")
    assert WhitespaceTokenizer().tokenize(text) == ["this", "is", "a", "test"]


def test_clean_text():
    assert CleanTextPreprocessor().normalize("  Hello,   World! (1995) ") == "hello world 1995"
    assert CleanTextPreprocessor(lowercase=False).normalize("Hi, There") == "Hi There"


def test_regex_tokenizer_default_skips_single_characters():
    assert RegexTokenizer().tokenize("a cat, a hat") == ["cat", "hat"]
    assert RegexTokenizer(r"\w+").tokenize("a cat") == ["a", "cat"]


def test_stemming_tokenizer():
    assert StemmingTokenizer().tokenize("running documents") == ["run", "document"]


def test_callables_are_wrapped():
    preprocessor = as_preprocessor(str.upper)
    tokenizer = as_tokenizer(lambda text: text.split(","))

    assert preprocessor.normalize("abc") == "ABC"
    assert isinstance(tokenizer, FunctionTokenizer)
    assert tokenizer.tokenize("a,b") == ["a", "b"]
    assert as_tokenizer(None) is None

    with pytest.raises(TypeError):
        as_tokenizer(42)


def test_factories():
    assert isinstance(create_preprocessor("lowercase"), LowercasePreprocessor)
    assert isinstance(create_tokenizer("regex", pattern=r"\d+"), RegexTokenizer)

    with pytest.raises(ValueError):
        create_preprocessor("unknown")
