# featurizer.py
"""
Text featurization settings shared by every trainer.

``FeaturizerSpec`` is plain data. ``build()`` turns it into a fresh, unfitted
scikit-learn vectorizer; each trainer fits its own copy.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

import regex as re
from sklearn.feature_extraction.text import CountVectorizer, TfidfVectorizer

PUNCT_RE = re.compile(r"[\p{P}\p{S}]+")
DIGIT_RE = re.compile(r"\p{N}+")
SPACE_RE = re.compile(r"\s+")

SUPPORTED_LANGUAGES = {"english": "english"}
WEIGHTINGS = ("tf", "tfidf", "idf")


def _make_preprocessor(lowercase: bool, keep_punctuation: bool, keep_numbers: bool):
    def preprocess(text: str) -> str:
        s = text.lower() if lowercase else text
        if not keep_punctuation:
            s = PUNCT_RE.sub(" ", s)
        if not keep_numbers:
            s = DIGIT_RE.sub(" ", s)
        return SPACE_RE.sub(" ", s).strip()

    return preprocess


@dataclass(frozen=True)
class FeaturizerSpec:
    language: str = "English"
    remove_stopwords: bool = True
    keep_punctuation: bool = False
    keep_numbers: bool = False
    lowercase: bool = True
    ngram_length: int = 2
    weighting: str = "tf"
    max_terms: Optional[int] = None
    min_count: int = 1

    def with_options(self, **changes) -> "FeaturizerSpec":
        return replace(self, **changes)

    def validate(self) -> None:
        if self.language.lower() not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language: {self.language}")
        if self.weighting not in WEIGHTINGS:
            raise ValueError(f"weighting must be one of {WEIGHTINGS}, got {self.weighting!r}")
        if self.ngram_length < 1:
            raise ValueError("ngram_length must be >= 1")
        if self.max_terms is not None and self.max_terms < 1:
            raise ValueError("max_terms must be positive")
        if self.min_count < 1:
            raise ValueError("min_count must be >= 1")

    def build(self):
        self.validate()
        common = dict(
            preprocessor=_make_preprocessor(
                self.lowercase, self.keep_punctuation, self.keep_numbers
            ),
            stop_words=SUPPORTED_LANGUAGES[self.language.lower()]
            if self.remove_stopwords
            else None,
            ngram_range=(1, self.ngram_length),
            max_features=self.max_terms,
            min_df=self.min_count,
        )
        if self.weighting == "tf":
            return CountVectorizer(**common)
        # "idf": binary term presence times idf, l2-normalised per document
        return TfidfVectorizer(
            use_idf=True,
            binary=self.weighting == "idf",
            norm="l2",
            **common,
        )
