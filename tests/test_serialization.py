"""Unit tests for saving and loading tokenizers."""

import pytest

import vocabtok as vtok
from vocabtok._models.base import VERSION
from vocabtok.errors import ModelLoadError


CORPUS = "the cat sat on the mat\nthe cat sat on the mat\n"


# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def subword_tokenizer():
    """Return a SubwordTokenizer whose corpus includes whitespace and newlines."""
    return vtok.SubwordTokenizer(CORPUS, max_vocab_size=30)


@pytest.fixture
def char_tokenizer():
    """Return a CharTokenizer over the same corpus."""
    return vtok.CharTokenizer(CORPUS)


# Save and load round-trip
# ---------------------------------------------------------------------------


def test_subword_save_load_roundtrip(subword_tokenizer, tmp_path):
    """Save and load preserves mappings, cap, and promotions."""
    prefix = str(tmp_path / "sub")
    subword_tokenizer.save(prefix)

    loaded = vtok.from_pretrained(f"{prefix}.model")
    assert isinstance(loaded, vtok.SubwordTokenizer)
    assert dict(loaded.vocab) == dict(subword_tokenizer.vocab)
    assert loaded.max_vocab_size == 30
    assert loaded.promotions == subword_tokenizer.promotions

    text = "the mat\nsat"
    assert loaded.encode(text) == subword_tokenizer.encode(text)
    assert loaded.decode(loaded.encode(text)) == text


def test_char_save_load_roundtrip(char_tokenizer, tmp_path):
    """CharTokenizer save and load preserves state."""
    prefix = str(tmp_path / "nested" / "char")
    char_tokenizer.save(prefix)

    loaded = vtok.from_pretrained(f"{prefix}.model")
    assert isinstance(loaded, vtok.CharTokenizer)
    assert dict(loaded.token_to_id) == dict(char_tokenizer.token_to_id)


def test_class_load_checks_type(char_tokenizer, tmp_path):
    """Loading a char model through SubwordTokenizer.load fails."""
    prefix = str(tmp_path / "char")
    char_tokenizer.save(prefix)

    with pytest.raises(ModelLoadError) as exc_info:
        vtok.SubwordTokenizer.load(f"{prefix}.model")
    assert exc_info.value.type_mismatch == ("char", ["subword"])


def test_vocab_file_is_readable(subword_tokenizer, tmp_path):
    """The .vocab file escapes control characters and shows pair parts."""
    prefix = tmp_path / "sub"
    subword_tokenizer.save(str(prefix))

    lines = prefix.with_suffix(".vocab").read_text(encoding="utf-8").splitlines()
    assert len(lines) == subword_tokenizer.vocab_size()
    assert any(line.endswith("\\u000a") for line in lines)
    first_pair = subword_tokenizer.promotions[0].pair
    idx = subword_tokenizer.token_to_id[first_pair]
    assert f"[{idx}] [{first_pair[0]}][{first_pair[1]}] -> {first_pair}" in lines


# Load failures
# ---------------------------------------------------------------------------


def test_missing_file(tmp_path):
    """A missing model file raises ModelLoadError."""
    with pytest.raises(ModelLoadError):
        vtok.from_pretrained(str(tmp_path / "nope.model"))


def test_wrong_suffix(tmp_path):
    """Only .model files are accepted."""
    path = tmp_path / "tok.txt"
    path.write_text("x", encoding="utf-8")
    with pytest.raises(ModelLoadError):
        vtok.from_pretrained(str(path))


def _write_model(path, body, version=VERSION, tok_type="subword"):
    path.write_text(
        f"VocabTok {version}\ntype {tok_type}\nmax_vocab 5\n---\n{body}---\n",
        encoding="utf-8",
    )


def test_version_mismatch(tmp_path):
    """A model written by another version is rejected."""
    path = tmp_path / "tok.model"
    _write_model(path, "1\n0 97\n", version="0.0.0-other")
    with pytest.raises(ModelLoadError) as exc_info:
        vtok.from_pretrained(str(path))
    assert exc_info.value.version_mismatch == ("0.0.0-other", VERSION)


def test_unknown_type(tmp_path):
    """An unregistered tokenizer type is rejected."""
    path = tmp_path / "tok.model"
    _write_model(path, "1\n0 97\n", tok_type="wordpiece")
    with pytest.raises(ModelLoadError):
        vtok.from_pretrained(str(path))


def test_non_utf8_model(tmp_path):
    """A binary file with a .model suffix raises ModelLoadError."""
    path = tmp_path / "tok.model"
    path.write_bytes(b"\xff\xfe garbage\n")
    with pytest.raises(ModelLoadError) as exc_info:
        vtok.from_pretrained(str(path))
    assert exc_info.value.model_path == str(path)
    with pytest.raises(ModelLoadError):
        vtok.CharTokenizer.load(str(path))


@pytest.mark.parametrize(
    "body",
    [
        "2\n0 97\n",  # fewer lines than announced
        "1\n0 abc\n",  # non-numeric code point
        "2\n0 97\n0 97\n",  # duplicate token
        "x\n",  # bad count
    ],
)
def test_malformed_body(tmp_path, body):
    """Malformed token sections raise ModelLoadError."""
    path = tmp_path / "tok.model"
    _write_model(path, body)
    with pytest.raises(ModelLoadError):
        vtok.from_pretrained(str(path))


def test_hand_written_model_loads(tmp_path):
    """A well-formed model file restores the listed tokens in order."""
    path = tmp_path / "tok.model"
    _write_model(path, "2\n0 97\n3 97 97\n")
    tok = vtok.from_pretrained(str(path))
    assert dict(tok.vocab) == {0: "a", 1: "aa"}
    assert tok.encode("aaaaa") == [1, 1, 0]
