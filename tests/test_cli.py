import pytest

from bigramgen import cli
from bigramgen.models.bigram import GenerationConfig
from bigramgen.utils.seeding import make_generator
from bigramgen.utils.trainer import Generator


@pytest.fixture
def corpus_file(tmp_path, corpus):
    path = tmp_path / 'corpus.txt'
    path.write_text(corpus, encoding='utf-8')
    return path


def fake_input(lines):
    lines = iter(lines)

    def read(prompt):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    return read


def test_read_texts_joins_files(tmp_path):
    first = tmp_path / 'a.txt'
    second = tmp_path / 'b.txt'
    first.write_text('end', encoding='utf-8')
    second.write_text('start', encoding='utf-8')
    assert cli.read_texts([first, second]) == 'end\nstart'


def test_missing_files_is_usage_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])
    assert excinfo.value.code == 2
    assert 'usage' in capsys.readouterr().err


def test_invalid_setting_is_usage_error(corpus_file):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(corpus_file), '--num-words', '-3', '--word', 'the'])
    assert excinfo.value.code == 2


def test_unreadable_file_exits(tmp_path):
    assert cli.main([str(tmp_path / 'missing.txt'), '--word', 'the']) == 1


def test_next(corpus_file, capsys):
    assert cli.main([str(corpus_file), '--mode', 'next', '--word', 'sat']) == 0
    assert capsys.readouterr().out == 'Next Word: on\n'


def test_unknown_word(corpus_file, capsys):
    assert cli.main([str(corpus_file), '--mode', 'next', '--word', 'bird']) == 1
    assert capsys.readouterr().out == cli.UNKNOWN_WORD + '\n'


def test_words(corpus_file, capsys):
    assert cli.main([str(corpus_file), '--seed', '1', '--word', 'sat', '--num-words', '3']) == 0
    words = capsys.readouterr().out.split()
    assert words[:3] == ['sat', 'on', 'the']
    assert len(words) == 4


def test_words_are_reproducible(corpus_file, capsys):
    args = [str(corpus_file), '--seed', '9', '--word', 'the', '--num-words', '6']
    cli.main(args)
    first = capsys.readouterr().out
    cli.main(args)
    assert capsys.readouterr().out == first


def test_sentence(corpus_file, capsys):
    assert cli.main([str(corpus_file), '--seed', '2', '--mode', 'sentence', '--word', 'the']) == 0
    out = capsys.readouterr().out.split()
    assert out[0] == 'the'
    assert out[-1] == '.'


def test_whitespace_policy(corpus_file, capsys):
    args = [str(corpus_file), '--policy', 'whitespace_only', '--mode', 'next', '--word', 'mat.']
    assert cli.main(args) == 0
    assert capsys.readouterr().out == 'Next Word: the\n'


def test_several_files(tmp_path, capsys):
    first = tmp_path / 'a.txt'
    second = tmp_path / 'b.txt'
    first.write_text('one two', encoding='utf-8')
    second.write_text('three', encoding='utf-8')
    assert cli.main([str(first), str(second), '--mode', 'next', '--word', 'two']) == 0
    assert capsys.readouterr().out == 'Next Word: three\n'


def test_interactive(corpus_file, monkeypatch, capsys):
    monkeypatch.setattr('builtins.input', fake_input(['sat\r\n', 'bird\n']))
    assert cli.main([str(corpus_file), '--seed', '4', '--num-words', '2']) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == 'sat on the'
    assert out[1] == cli.UNKNOWN_WORD


def test_interactive_sentence_mode(model, monkeypatch, capsys):
    monkeypatch.setattr('builtins.input', fake_input(['on']))
    generator = Generator(model, make_generator(0))
    assert cli.interactive(generator, 'sentence', GenerationConfig()) == 0
    first = capsys.readouterr().out.splitlines()[0].split()
    assert first[:2] == ['on', 'the']
    assert first[-1] == '.'


def test_respond_prefixes_start_word(model, scripted):
    generator = Generator(model, scripted([0.6, 0.1]))
    config = GenerationConfig(num_words=2)
    assert cli.respond(generator, 'the', 'words', config) == 'the dog sat'


def test_report_unknown_prints_partial(capsys, scripted):
    generator = Generator(cli.build_model('a b c', 'whitespace_only'), scripted([0.0, 0.0]))
    with pytest.raises(cli.UnrecognizedWordError) as excinfo:
        cli.respond(generator, 'a', 'words', GenerationConfig(num_words=5))
    cli.report_unknown('a', excinfo.value)
    assert capsys.readouterr().out.splitlines() == ['a b c', cli.UNKNOWN_WORD]


class InterruptedGenerator:
    def generate_sentence(self, word, **kwargs):
        raise KeyboardInterrupt

    generate = generate_sentence


def test_interactive_ctrl_c_during_generation(monkeypatch, capsys):
    monkeypatch.setattr('builtins.input', fake_input(['the', 'cat']))
    assert cli.interactive(InterruptedGenerator(), 'sentence', GenerationConfig()) == 0
    assert capsys.readouterr().out == '\n'
