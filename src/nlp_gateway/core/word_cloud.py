"""
Word cloud generation from provider keywords.

Tokenizes text locally with NLTK, drops stopwords, counts the remaining
tokens and keeps the counts of tokens that match a provider keyword.
"""

from collections import Counter
from functools import lru_cache
from typing import Iterable, Optional

import nltk
from nltk.corpus import stopwords as nltk_stopwords
from nltk.tokenize import RegexpTokenizer

from nlp_gateway.core.language_service import LanguageService
from nlp_gateway.exceptions import InvalidInput
from nlp_gateway.logger import get_logger
from nlp_gateway.models import OccurrenceCount

logger = get_logger(__name__)

_tokenizer = RegexpTokenizer(r"\w+")


@lru_cache(maxsize=8)
def load_stopwords(language: str = "english") -> frozenset[str]:
    """Load the NLTK stopword list for a language.

    Downloads the stopwords corpus on first use if it is not installed.

    Args:
        language: NLTK corpus language name

    Returns:
        Frozen set of lowercase stopwords
    """
    try:
        nltk.data.find("corpora/stopwords")
    except LookupError:
        logger.info("NLTK stopwords corpus not found, downloading")
        nltk.download("stopwords", quiet=True)

    return frozenset(word.lower() for word in nltk_stopwords.words(language))


def require_text(text: Optional[str]) -> str:
    """Return text unchanged, or raise if it is missing or blank.

    Raises:
        InvalidInput: If text is None, not a string, or only whitespace
    """
    if not isinstance(text, str) or not text.strip():
        raise InvalidInput("Text must be a non-empty string")
    return text


def preprocess_text(text: str, stopwords: Iterable[str]) -> list[str]:
    """Lowercase, tokenize and drop stopwords.

    Args:
        text: Raw text
        stopwords: Lowercase words to exclude

    Returns:
        Surviving tokens in text order
    """
    stopword_set = stopwords if isinstance(stopwords, (set, frozenset)) else set(stopwords)
    tokens = _tokenizer.tokenize(text.lower())
    return [token for token in tokens if token not in stopword_set]


def count_occurrences(
    tokens: list[str],
    keywords: Iterable[str],
    deduplicate: bool = False,
    ignore_keyword_case: bool = False,
) -> list[OccurrenceCount]:
    """Intersect token counts with a keyword list.

    Keywords are walked in order and each is compared against every
    counted token. A keyword given twice yields its entry twice unless
    ``deduplicate`` is set.

    Args:
        tokens: Preprocessed tokens
        keywords: Provider keywords
        deduplicate: Keep only the first entry for each word
        ignore_keyword_case: Lowercase keywords before comparing

    Returns:
        OccurrenceCount entries in keyword order
    """
    word_frequency = Counter(tokens)

    results: list[OccurrenceCount] = []
    seen: set[str] = set()

    for keyword in keywords:
        if ignore_keyword_case:
            keyword = keyword.lower()
        for word, count in word_frequency.items():
            if word != keyword:
                continue
            if deduplicate and word in seen:
                continue
            seen.add(word)
            results.append(OccurrenceCount(word=word, count=count))

    return results


def generate_word_cloud(
    text: Optional[str],
    keywords: Iterable[str],
    stopwords: Optional[Iterable[str]] = None,
    deduplicate: bool = False,
    ignore_keyword_case: bool = False,
) -> list[OccurrenceCount]:
    """Count how often each keyword occurs in text.

    Args:
        text: Source text
        keywords: Keywords to report on
        stopwords: Words excluded from counting (defaults to NLTK English)
        deduplicate: Keep only the first entry for each word
        ignore_keyword_case: Lowercase keywords before comparing

    Returns:
        OccurrenceCount entries ordered by keyword

    Raises:
        InvalidInput: If text is missing or blank
    """
    text = require_text(text)
    keywords = list(keywords)
    if not keywords:
        return []

    if stopwords is None:
        stopwords = load_stopwords()

    tokens = preprocess_text(text, stopwords)
    return count_occurrences(
        tokens,
        keywords,
        deduplicate=deduplicate,
        ignore_keyword_case=ignore_keyword_case,
    )


class WordCloudGenerator:
    """Build word clouds from provider keywords."""

    def __init__(
        self,
        language_service: LanguageService,
        stopwords: Optional[Iterable[str]] = None,
        deduplicate: bool = False,
        ignore_keyword_case: bool = False,
    ) -> None:
        """Initialize the generator.

        Args:
            language_service: LanguageService used for keyword extraction
            stopwords: Words excluded from counting (defaults to NLTK English)
            deduplicate: Keep only the first entry for each word
            ignore_keyword_case: Lowercase keywords before comparing
        """
        self.language_service = language_service
        self.stopwords = frozenset(stopwords) if stopwords is not None else None
        self.deduplicate = deduplicate
        self.ignore_keyword_case = ignore_keyword_case

    async def generate(self, text: Optional[str]) -> list[OccurrenceCount]:
        """Extract keywords for text and count their occurrences.

        Raises:
            InvalidInput: If text is missing or blank
            ProviderError: If keyword extraction fails
        """
        text = require_text(text)
        keywords = await self.language_service.extract_keywords(text)

        result = generate_word_cloud(
            text,
            keywords,
            stopwords=self.stopwords,
            deduplicate=self.deduplicate,
            ignore_keyword_case=self.ignore_keyword_case,
        )
        logger.debug(f"Word cloud: {len(keywords)} keywords, {len(result)} matches")
        return result
