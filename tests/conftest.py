"""
Shared fixtures.

The English reference is built from an offline sample instead of the
Gutenberg download so that no test needs the network.
"""

import pytest

from cryptopals.analysis.english import EnglishScorer
from cryptopals.challenges.set1 import ChallengeContext
from cryptopals.config import Settings


ENGLISH_SAMPLE = """\
The harbour was quiet in the early morning, and the fishermen walked down to
their boats without saying much. Most of them had been doing the same thing
for thirty years or more, and there was little left to talk about. The water
was grey and flat, and a thin mist hung over the far side of the bay where the
old lighthouse stood. Nobody had kept the light for a long time now, but the
children of the village still told stories about the keeper who had lived
there alone with his dog and his books.

When the sun finally came through the clouds, the whole town seemed to wake up
at once. Shops opened their shutters, the baker put fresh bread in the window,
and the school bell rang twice to call the younger pupils inside. An old woman
sat on a bench near the church and fed the pigeons from a paper bag, as she did
every day, whatever the weather. She said that the birds knew her better than
most of the people in the street, and perhaps she was right.

In the afternoon the wind turned and brought the smell of rain from the west.
The boats came back one after another, low in the water with the day's catch,
and the men unloaded crates of fish onto the stone quay while the gulls
screamed above them. It had been a good day, better than most that season, and
for once there was laughter on the harbour as the light began to fade. Later,
in the small inn at the top of the hill, they would sit by the fire and tell
each other that tomorrow would be just as good, although none of them really
believed it.

There is a particular kind of patience that belongs to people who live by the
sea. They learn early that the tide will not be hurried, that storms arrive
when they please, and that a net mended carefully today may save a life next
winter. It is not a patience that looks very exciting from the outside, but it
has kept this village alive for many hundreds of years, through wars and hard
times and the slow departure of the young people to the cities in the south.
"""


@pytest.fixture(scope="session")
def english_sample() -> str:
    return ENGLISH_SAMPLE


@pytest.fixture(scope="session")
def scorer() -> EnglishScorer:
    return EnglishScorer.from_text(ENGLISH_SAMPLE)


@pytest.fixture
def settings(tmp_path_factory) -> Settings:
    cache_dir = tmp_path_factory.mktemp("cache")
    return Settings(cache_dir=cache_dir, data_url="https://example.invalid/data")


class FakeContext(ChallengeContext):
    """Challenge context serving data files from a dict."""

    def __init__(self, settings: Settings, scorer: EnglishScorer, files=None):
        super().__init__(settings=settings)
        self._scorer = scorer
        self.files = files or {}

    def read_data(self, name: str) -> str:
        return self.files[name]


@pytest.fixture
def make_context(settings, scorer):
    def factory(files=None) -> FakeContext:
        return FakeContext(settings, scorer, files)
    return factory
