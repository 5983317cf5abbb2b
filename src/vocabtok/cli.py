"""Command line driver: train, inspect and compare tokenizers."""

import argparse
import logging
import os
import sys
from pathlib import Path

from ._models.subword import DEFAULT_MAX_VOCAB_SIZE
from .errors import VocabTokError
from .factory import from_pretrained, get_tokenizer, list_tokenizers

LOG_LEVEL_ENV = "VOCABTOK_LOG_LEVEL"

log = logging.getLogger(__name__)


def load_corpus(args: argparse.Namespace) -> str:
    """Return training text from ``--corpus`` or a Hugging Face ``--dataset``."""
    if args.dataset:
        # heavy import, only needed for hub corpora
        from datasets import load_dataset

        ds = load_dataset(args.dataset, split=args.split)
        lines = ds[:][args.text_field]
        log.info(f"loaded {len(lines)} rows from {args.dataset}")
        return "".join(lines)

    text = Path(args.corpus).read_text(encoding="utf-8")
    log.info(f"loaded {len(text)} chars from {args.corpus}")
    return text


def _subword_kwargs(args: argparse.Namespace) -> dict:
    return {"max_vocab_size": args.max_vocab, "verbose": args.verbose}


def cmd_train(args: argparse.Namespace) -> int:
    corpus = load_corpus(args)
    if args.kind == "subword":
        tok = get_tokenizer("subword", corpus, **_subword_kwargs(args))
    else:
        tok = get_tokenizer("char", corpus)
    tok.save(args.out)
    print(f"{tok.TOKENIZER_TYPE} tokenizer: {tok.vocab_size()} tokens -> {args.out}")
    return 0


def cmd_encode(args: argparse.Namespace) -> int:
    tok = from_pretrained(args.model)
    ids = tok.encode(args.text)
    print(" ".join(str(idx) for idx in ids))
    print(f"Number of tokens: {len(ids)}")
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    tok = from_pretrained(args.model)
    print(tok.decode(args.ids))
    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    """Print how many tokens each tokenizer needs for the same text."""
    corpus = load_corpus(args)
    counts: list[tuple[str, int]] = [
        ("char", len(get_tokenizer("char", corpus).encode(args.text))),
        (
            "subword",
            len(get_tokenizer("subword", corpus, **_subword_kwargs(args)).encode(args.text)),
        ),
    ]
    if args.reference:
        from .reference import count_reference_tokens

        counts.append((args.reference, count_reference_tokens(args.text, args.reference)))

    print(f"Input length (characters): {len(args.text)}")
    width = max(len(name) for name, _ in counts)
    for name, n_tokens in counts:
        print(f"{name:<{width}}  {n_tokens:>6} tokens")
    return 0


def _add_corpus_args(p: argparse.ArgumentParser) -> None:
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--corpus", help="path to a UTF-8 training text file")
    src.add_argument("--dataset", help="Hugging Face dataset name to train on")
    p.add_argument("--split", default="train", help="dataset split (default: train)")
    p.add_argument(
        "--text-field", default="text", help="dataset column holding text (default: text)"
    )
    p.add_argument(
        "--max-vocab",
        type=int,
        default=DEFAULT_MAX_VOCAB_SIZE,
        help=f"subword vocabulary cap (default: {DEFAULT_MAX_VOCAB_SIZE})",
    )
    p.add_argument("--verbose", action="store_true", help="log every promoted pair")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vocabtok", description="Character and subword tokenizers built from a corpus."
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV, "WARNING"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help=f"logging level (default: ${LOG_LEVEL_ENV} or WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_train = sub.add_parser("train", help="build a tokenizer and save it")
    p_train.add_argument("--kind", choices=list_tokenizers(), default="subword")
    _add_corpus_args(p_train)
    p_train.add_argument("--out", required=True, help="output path prefix")
    p_train.set_defaults(func=cmd_train)

    p_encode = sub.add_parser("encode", help="encode text with a saved tokenizer")
    p_encode.add_argument("--model", required=True, help="path to a .model file")
    p_encode.add_argument("text")
    p_encode.set_defaults(func=cmd_encode)

    p_decode = sub.add_parser("decode", help="decode token ids with a saved tokenizer")
    p_decode.add_argument("--model", required=True, help="path to a .model file")
    p_decode.add_argument("ids", nargs="*", type=int)
    p_decode.set_defaults(func=cmd_decode)

    p_compare = sub.add_parser("compare", help="compare token counts across tokenizers")
    _add_corpus_args(p_compare)
    p_compare.add_argument(
        "--reference", metavar="ENCODING", help="also count with a tiktoken encoding, e.g. o200k_base"
    )
    p_compare.add_argument("text")
    p_compare.set_defaults(func=cmd_compare)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.getLevelNamesMapping()[args.log_level]
    # promotions are logged at INFO
    if getattr(args, "verbose", False):
        level = min(level, logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("vocabtok").setLevel(level)

    try:
        return args.func(args)
    except (VocabTokError, OSError) as e:
        print(f"vocabtok: error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
