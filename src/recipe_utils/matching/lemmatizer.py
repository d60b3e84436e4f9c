"""Word lemmatizers used to normalise step text and ingredient names."""

import abc
import logging
import re
from typing import List, Tuple

from nltk.stem import WordNetLemmatizer as _NltkWordNetLemmatizer
from nltk.stem.snowball import SnowballStemmer

logger = logging.getLogger(__name__)

# Runs of letters; digits and underscores split words
WORD_PATTERN = re.compile(r"[^\W\d_]+")


class Lemmatizer(abc.ABC):
    """Splits text into words and maps each word onto its lemma.

    Subclasses implement ``lemma``; the base class handles word splitting
    and lower-casing.
    """

    def lemmatize(self, text: str) -> List[Tuple[str, str]]:
        """Return ``(surface, lemma)`` pairs for every word in ``text``.

        Examples:
            >>> IdentityLemmatizer().lemmatize("Chopped Onions")
            [('Chopped', 'chopped'), ('Onions', 'onions')]
        """
        pairs = []
        for word in WORD_PATTERN.findall(text):
            lower = word.lower()
            pairs.append((word, self.lemma(lower) or lower))
        return pairs

    def lemmas(self, text: str) -> List[str]:
        return [lemma for _, lemma in self.lemmatize(text)]

    @abc.abstractmethod
    def lemma(self, word: str) -> str:
        """Lemma of one lower-cased word."""


class IdentityLemmatizer(Lemmatizer):
    """Uses the lower-cased surface form as the lemma."""

    def lemma(self, word: str) -> str:
        return word


class SnowballLemmatizer(Lemmatizer):
    """NLTK's English Snowball stemmer.

    Stems are not dictionary words ("sauce" becomes "sauc") but plural and
    inflected forms collapse together, and no corpus download is needed.
    """

    def __init__(self, language: str = "english"):
        self._stemmer = SnowballStemmer(language)

    def lemma(self, word: str) -> str:
        return self._stemmer.stem(word)


class WordNetLemmatizer(Lemmatizer):
    """NLTK's WordNet lemmatizer, trying the noun reading before the verb.

    Needs the ``wordnet`` corpus (``nltk.download("wordnet")``). When it is
    missing a warning is logged once and surface forms are used instead.
    """

    def __init__(self):
        self._lemmatizer = _NltkWordNetLemmatizer()
        self._available = True

    def lemma(self, word: str) -> str:
        if not self._available:
            return word
        try:
            noun = self._lemmatizer.lemmatize(word, pos="n")
            if noun != word:
                return noun
            return self._lemmatizer.lemmatize(word, pos="v")
        except LookupError as e:
            self._available = False
            logger.warning(f"WordNet corpus unavailable, using surface forms: {e}")
            return word
