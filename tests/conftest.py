import pytest

from bigramgen.utils.trainer import build_model


CORPUS = "the cat sat on the mat. the dog sat on the rug."


class ScriptedRandom:
    """Random source that replays a fixed list of draws."""

    def __init__(self, draws):
        self.draws = list(draws)

    def random(self):
        return self.draws.pop(0)


@pytest.fixture
def corpus():
    return CORPUS


@pytest.fixture
def model():
    return build_model(CORPUS)


@pytest.fixture
def scripted():
    return ScriptedRandom
