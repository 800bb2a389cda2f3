"""Command-line interface for building a bigram model and generating text."""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional, Sequence

from bigramgen.data.tokenizer import POLICIES
from bigramgen.errors import BigramGenError, UnrecognizedWordError
from bigramgen.models.bigram import BigramModel, GenerationConfig
from bigramgen.utils.seeding import make_generator
from bigramgen.utils.trainer import Generator, build_model


logger = logging.getLogger(__name__)

PROMPT = 'Please enter a word: '
UNKNOWN_WORD = "Sorry, I don't know that word"
MODES = ('words', 'sentence', 'next')


def setup_logging(level=logging.INFO):
    """Configure logging."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def read_texts(paths: Sequence[Path]) -> str:
    """Read every file and join the contents into one corpus."""
    texts = []
    for path in paths:
        with open(path, 'r', encoding='utf-8') as f:
            texts.append(f.read())
    return '\n'.join(texts)


def load_model(paths: Sequence[Path], config: GenerationConfig) -> BigramModel:
    """Read the corpus files and build the model, timing construction."""
    text = read_texts(paths)
    logger.info(f"Read {len(text)} characters from {len(paths)} file(s)")
    start = time.perf_counter()
    model = build_model(text, config.policy)
    logger.info(f"Creating model took {time.perf_counter() - start:.4f}s")
    return model


def respond(generator: Generator, word: str, mode: str, config: GenerationConfig) -> str:
    """Answer one request; the start word leads generated output."""
    start = time.perf_counter()
    try:
        if mode == 'next':
            return f"Next Word: {generator.next_word(word)}"
        if mode == 'sentence':
            tokens = generator.generate_sentence(
                word,
                max_tokens=config.max_sentence_tokens,
                stop_tokens=config.stop_tokens,
            )
        else:
            tokens = generator.generate(word, config.num_words)
        return ' '.join([word] + tokens)
    finally:
        logger.info(f"Generating response took {time.perf_counter() - start:.4f}s")


def report_unknown(word: str, error: UnrecognizedWordError) -> None:
    if error.generated:
        print(' '.join([word] + error.generated))
    print(UNKNOWN_WORD)


def interactive(generator: Generator, mode: str, config: GenerationConfig) -> int:
    """Prompt for start words until EOF or Ctrl-C."""
    while True:
        try:
            line = input(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            return 0
        word = line.rstrip('\r\n')
        try:
            print(respond(generator, word, mode, config))
        except UnrecognizedWordError as e:
            report_unknown(word, e)
        except KeyboardInterrupt:
            print()
            return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='bigramgen',
        description='Build a bigram model from text files and generate text'
    )
    parser.add_argument(
        'files',
        type=Path,
        nargs='+',
        help='Corpus file(s), concatenated in order'
    )
    parser.add_argument(
        '--mode',
        choices=MODES,
        default='words',
        help='Fixed number of words, one sentence, or a single next word'
    )
    parser.add_argument(
        '--word',
        help='Start word; prompts interactively when omitted'
    )
    parser.add_argument(
        '--policy',
        choices=POLICIES,
        default=GenerationConfig.policy,
        help='Tokenization policy'
    )
    parser.add_argument('--num-words', type=int, default=GenerationConfig.num_words)
    parser.add_argument(
        '--max-tokens',
        type=int,
        default=GenerationConfig.max_sentence_tokens,
        help='Upper bound on sentence length'
    )
    parser.add_argument('--seed', type=int, help='Seed for reproducible output')
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(getattr(logging, args.log_level))

    config = GenerationConfig(
        policy=args.policy,
        num_words=args.num_words,
        max_sentence_tokens=args.max_tokens,
        seed=args.seed,
    )
    try:
        config.validate()
    except BigramGenError as e:
        parser.error(str(e))

    try:
        model = load_model(args.files, config)
    except OSError as e:
        logger.error(f"Could not read corpus: {e}")
        return 1

    generator = Generator(model, make_generator(config.seed))
    if args.word is None:
        return interactive(generator, args.mode, config)
    try:
        print(respond(generator, args.word, args.mode, config))
    except UnrecognizedWordError as e:
        report_unknown(args.word, e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
