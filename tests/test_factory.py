"""Unit tests for the tokenizer factory."""

import pytest

import vocabtok as vtok


def test_list_tokenizers():
    """Both kinds are registered."""
    assert vtok.list_tokenizers() == ["char", "subword"]


def test_get_tokenizer_char():
    """get_tokenizer("char") builds a CharTokenizer."""
    tok = vtok.get_tokenizer("char", "abab")
    assert isinstance(tok, vtok.CharTokenizer)
    assert tok.encode("ba") == [1, 0]


def test_get_tokenizer_subword_forwards_kwargs():
    """Keyword arguments reach the SubwordTokenizer constructor."""
    tok = vtok.get_tokenizer("subword", "aaaa", max_vocab_size=2)
    assert isinstance(tok, vtok.SubwordTokenizer)
    assert tok.get_vocabulary() == frozenset({"a", "aa"})


def test_get_tokenizer_unknown_kind():
    """Unknown kinds raise VocabTokError."""
    with pytest.raises(vtok.VocabTokError):
        vtok.get_tokenizer("wordpiece", "abab")  # type: ignore[call-overload]


def test_instances_are_independent():
    """Tokenizers built from different corpora share no state."""
    first = vtok.get_tokenizer("char", "ab")
    second = vtok.get_tokenizer("char", "ba")
    assert first.encode("ab") == [0, 1]
    assert second.encode("ab") == [1, 0]


def test_from_pretrained_path_errors_name_the_file(tmp_path):
    """Missing files and wrong suffixes are reported once, with the path."""
    missing = tmp_path / "nope.model"
    with pytest.raises(vtok.ModelLoadError, match="does not exist") as exc_info:
        vtok.from_pretrained(str(missing))
    assert exc_info.value.model_path == str(missing)

    wrong = tmp_path / "tok.txt"
    wrong.write_text("VocabTok dev\n", encoding="utf-8")
    with pytest.raises(vtok.ModelLoadError, match="expected .model file") as exc_info:
        vtok.from_pretrained(str(wrong))
    assert exc_info.value.model_path == str(wrong)


def test_from_pretrained_restores_registered_kind(tmp_path):
    """The saved type picks the class that is rebuilt."""
    vtok.get_tokenizer("char", "abc").save(str(tmp_path / "tok"))
    tok = vtok.from_pretrained(str(tmp_path / "tok.model"))
    assert isinstance(tok, vtok.CharTokenizer)
    assert tok.decode([2, 0]) == "ca"
