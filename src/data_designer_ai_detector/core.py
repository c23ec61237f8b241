# Statistical AI-likeness scorer for prose.
#
# Extracts eight independent text signals (burstiness, character-trigram
# perplexity, repetition, connector overuse, sentence-length uniformity, word
# length, clause complexity, vocabulary commonness), maps each to a 0-1
# AI-likeness sub-score, and combines them with fixed weights into a 0-100
# score, a verdict band, and up to five highlighted sentences.

from __future__ import annotations

import math
import re
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

# ---------------------------------------------------------------------------
# Hyperparameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Hyperparameters:
    """Weights, normalization thresholds, and band edges used by the scorer."""

    weight_perplexity: float = 0.22
    weight_burstiness: float = 0.18
    weight_repetition: float = 0.16
    weight_connectors: float = 0.10
    weight_uniformity: float = 0.12
    weight_avg_word_length: float = 0.10
    weight_complexity: float = 0.07
    weight_uncommon: float = 0.05

    repetition_unigram_min_count: int = 3
    repetition_bigram_min_count: int = 2
    repetition_unigram_share: float = 0.6
    repetition_bigram_share: float = 0.4
    connector_ratio_multiplier: float = 8.0
    complexity_words_basis: float = 20.0
    uncommon_pivot_ratio: float = 0.6
    uncommon_excess_slope: float = 0.1

    perplexity_pivot: float = 6.0
    perplexity_cap: float = 12.0
    avg_word_length_floor: float = 4.0
    avg_word_length_cap: float = 7.0
    complexity_divisor: float = 2.0

    highlight_repetition_min: float = 0.12
    highlight_avg_word_length_min: float = 5.5
    highlight_connectors_min: float = 0.08
    highlight_cap: int = 5

    score_min: int = 0
    score_max: int = 100
    verdict_human_max: int = 40
    verdict_uncertain_max: int = 70

    def __post_init__(self) -> None:
        total = sum(self.weights.values())
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"Signal weights must sum to 1.0, got {total:.6f}")
        if self.verdict_human_max >= self.verdict_uncertain_max:
            raise ValueError("verdict_human_max must be below verdict_uncertain_max")

    @property
    def weights(self) -> dict[str, float]:
        return {
            "perplexity": self.weight_perplexity,
            "burstiness": self.weight_burstiness,
            "repetition": self.weight_repetition,
            "connectors": self.weight_connectors,
            "uniformity": self.weight_uniformity,
            "avg_word_length": self.weight_avg_word_length,
            "complexity": self.weight_complexity,
            "uncommon": self.weight_uncommon,
        }


DEFAULT_HYPERPARAMETERS = Hyperparameters()


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


class Verdict(str, Enum):
    HUMAN = "Human"
    UNCERTAIN = "Uncertain"
    AI = "AI"

    @property
    def legacy(self) -> str:
        """Lowercase alias (``human``/``uncertain``/``ai``) read by older clients."""
        return self.value.lower()


@dataclass(frozen=True)
class Signal:
    name: str
    value: float
    details: dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class DetectionResult:
    score: int
    verdict: Verdict
    highlights: list[str]
    details: dict[str, float]
    signals: dict[str, float] = field(default_factory=dict)

    @property
    def verdict_legacy(self) -> str:
        return self.verdict.legacy

    def to_payload(self) -> dict[str, object]:
        return {
            "score": self.score,
            "verdict": self.verdict.value,
            "verdict_legacy": self.verdict_legacy,
            "highlights": list(self.highlights),
            "details": dict(self.details),
            "signals": dict(self.signals),
        }


@dataclass(frozen=True)
class _SignalContext:
    text: str
    sentences: list[str]
    tokens: list[str]
    hp: Hyperparameters


_Extractor = Callable[[_SignalContext], Signal]

# ---------------------------------------------------------------------------
# Compiled patterns and word lists
# ---------------------------------------------------------------------------

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_TOKEN_STRIP_RE = re.compile(r"[^a-z0-9\s']")
_NON_LETTER_RE = re.compile(r"[^a-z\s]")
_WHITESPACE_RE = re.compile(r"\s+")
_CLAUSE_MARK_RE = re.compile(r"[,;]")

# Punctuated members never match a tokenize() output.
_CONNECTORS = frozenset({
    "moreover", "furthermore", "additionally", "however", "therefore", "thus",
    "hence", "consequently", "overall", "in", "addition", "also",
    "additionally,", "additionally.", "however,", "therefore,",
})

_COMMON_WORDS = frozenset({
    "the", "be", "to", "of", "and", "a", "in", "that", "have", "i",
    "it", "for", "not", "on", "with", "he", "as", "you", "do", "at",
})

# ---------------------------------------------------------------------------
# Segmentation
# ---------------------------------------------------------------------------


def to_sentences(text: str) -> list[str]:
    """Split on runs of ``.``, ``!`` and ``?``, dropping empty pieces."""
    return [s.strip() for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]


def tokenize(text: str) -> list[str]:
    """Lowercase word tokens made of ``[a-z0-9']``."""
    return _TOKEN_STRIP_RE.sub(" ", text.lower()).split()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _word_count(sentence: str) -> int:
    return len(sentence.split())


def _coefficient_of_variation(values: list[int]) -> float:
    if len(values) <= 1:
        return 0.0
    mean = sum(values) / len(values)
    if mean == 0:
        return 0.0
    variance = sum((x - mean) ** 2 for x in values) / (len(values) - 1)
    return math.sqrt(variance) / mean


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


# ---------------------------------------------------------------------------
# Signals: each returns the raw value for one textual property
# ---------------------------------------------------------------------------


def signal_burstiness(sentences: list[str]) -> Signal:
    if len(sentences) <= 1:
        return Signal("burstiness", 0.0, {"lengths": []})
    lengths = [_word_count(s) for s in sentences]
    return Signal("burstiness", _coefficient_of_variation(lengths), {"lengths": lengths})


def signal_pseudo_perplexity(text: str) -> Signal:
    chars = _WHITESPACE_RE.sub(" ", _NON_LETTER_RE.sub(" ", text.lower()))
    if len(chars) < 3:
        return Signal("perplexity", 0.0)
    counts = Counter(chars[i : i + 3] for i in range(len(chars) - 2))
    total = len(chars) - 2
    entropy = -sum((c / total) * math.log2(c / total) for c in counts.values())
    return Signal("perplexity", 2.0 ** entropy, {"trigrams": total, "distinct": len(counts)})


def signal_repetition(tokens: list[str], hp: Hyperparameters = DEFAULT_HYPERPARAMETERS) -> Signal:
    if not tokens:
        return Signal("repetition", 0.0)
    unigrams = Counter(tokens)
    repeats = sum(1 for c in unigrams.values() if c >= hp.repetition_unigram_min_count)
    repeat_ratio = repeats / max(1, len(unigrams))

    bigrams = Counter(f"{a} {b}" for a, b in zip(tokens, tokens[1:]))
    frequent = sum(1 for c in bigrams.values() if c >= hp.repetition_bigram_min_count)
    bigram_ratio = frequent / max(1, len(bigrams))

    value = hp.repetition_unigram_share * repeat_ratio + hp.repetition_bigram_share * bigram_ratio
    return Signal("repetition", value, {"unigram_ratio": repeat_ratio, "bigram_ratio": bigram_ratio})


def signal_connector_overuse(tokens: list[str], hp: Hyperparameters = DEFAULT_HYPERPARAMETERS) -> Signal:
    if not tokens:
        return Signal("connectors", 0.0)
    count = sum(1 for t in tokens if t in _CONNECTORS)
    ratio = count / len(tokens)
    return Signal("connectors", min(1.0, ratio * hp.connector_ratio_multiplier), {"count": count})


def signal_uniform_structure(sentences: list[str]) -> Signal:
    if len(sentences) <= 1:
        return Signal("uniformity", 0.0)
    cv = _coefficient_of_variation([_word_count(s) for s in sentences])
    return Signal("uniformity", 1.0 - _clamp(cv))


def signal_avg_word_length(tokens: list[str]) -> Signal:
    if not tokens:
        return Signal("avg_word_length", 0.0)
    return Signal("avg_word_length", sum(len(t) for t in tokens) / len(tokens))


def signal_sentence_complexity(sentences: list[str], hp: Hyperparameters = DEFAULT_HYPERPARAMETERS) -> Signal:
    if not sentences:
        return Signal("complexity", 0.0)
    per_sentence = [
        len(_CLAUSE_MARK_RE.findall(s)) / max(1.0, _word_count(s) / hp.complexity_words_basis)
        for s in sentences
    ]
    return Signal("complexity", sum(per_sentence) / len(per_sentence), {"per_sentence": per_sentence})


def signal_uncommon_vocabulary(tokens: list[str], hp: Hyperparameters = DEFAULT_HYPERPARAMETERS) -> Signal:
    if not tokens:
        return Signal("uncommon", 0.0)
    ratio = sum(1 for t in tokens if t not in _COMMON_WORDS) / len(tokens)
    pivot = hp.uncommon_pivot_ratio
    if ratio < pivot:
        value = (pivot - ratio) / pivot
    else:
        value = hp.uncommon_excess_slope * (ratio - pivot)
    return Signal("uncommon", _clamp(value), {"uncommon_ratio": ratio})


# ---------------------------------------------------------------------------
# Normalization: raw signal to 0-1 AI-likeness
# ---------------------------------------------------------------------------


def _norm_perplexity(raw: float, hp: Hyperparameters) -> float:
    return _clamp((hp.perplexity_pivot - min(raw, hp.perplexity_cap)) / hp.perplexity_pivot)


def _norm_burstiness(raw: float, _hp: Hyperparameters) -> float:
    return 1.0 - _clamp(min(raw, 1.0))


def _norm_identity(raw: float, _hp: Hyperparameters) -> float:
    return _clamp(raw)


def _norm_avg_word_length(raw: float, hp: Hyperparameters) -> float:
    span = hp.avg_word_length_cap - hp.avg_word_length_floor
    return _clamp((min(raw, hp.avg_word_length_cap) - hp.avg_word_length_floor) / span)


def _norm_complexity(raw: float, hp: Hyperparameters) -> float:
    return _clamp(min(raw / hp.complexity_divisor, 1.0))


_NORMALIZERS: dict[str, Callable[[float, Hyperparameters], float]] = {
    "perplexity": _norm_perplexity,
    "burstiness": _norm_burstiness,
    "repetition": _norm_identity,
    "connectors": _norm_identity,
    "uniformity": _norm_identity,
    "avg_word_length": _norm_avg_word_length,
    "complexity": _norm_complexity,
    "uncommon": _norm_identity,
}

# ---------------------------------------------------------------------------
# Pipeline wiring
# ---------------------------------------------------------------------------

_PIPELINE: list[_Extractor] = [
    lambda ctx: signal_pseudo_perplexity(ctx.text),
    lambda ctx: signal_burstiness(ctx.sentences),
    lambda ctx: signal_repetition(ctx.tokens, ctx.hp),
    lambda ctx: signal_connector_overuse(ctx.tokens, ctx.hp),
    lambda ctx: signal_uniform_structure(ctx.sentences),
    lambda ctx: signal_avg_word_length(ctx.tokens),
    lambda ctx: signal_sentence_complexity(ctx.sentences, ctx.hp),
    lambda ctx: signal_uncommon_vocabulary(ctx.tokens, ctx.hp),
]


def extract_signals(text: str, hyperparameters: Hyperparameters | None = None) -> dict[str, Signal]:
    """Run every extractor over ``text`` and return raw signals keyed by name."""
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    context = _SignalContext(text=text, sentences=to_sentences(text), tokens=tokenize(text), hp=hp)
    signals = (extractor(context) for extractor in _PIPELINE)
    return {s.name: s for s in signals}


def normalize(signals: dict[str, Signal], hp: Hyperparameters) -> dict[str, float]:
    return {name: fn(signals[name].value, hp) for name, fn in _NORMALIZERS.items()}


def _weighted_score(breakdown: dict[str, float], hp: Hyperparameters) -> int:
    weighted = sum(weight * breakdown[name] for name, weight in hp.weights.items())
    return max(hp.score_min, min(hp.score_max, round_half_up(weighted * 100)))


def verdict_for(score: int, hyperparameters: Hyperparameters | None = None) -> Verdict:
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    if score <= hp.verdict_human_max:
        return Verdict.HUMAN
    if score <= hp.verdict_uncertain_max:
        return Verdict.UNCERTAIN
    return Verdict.AI


def find_highlights(sentences: list[str], hyperparameters: Hyperparameters | None = None) -> list[str]:
    """Return the first sentences whose own tokens look locally machine-like.

    Each sentence is tokenized on its own and flagged when its repetition,
    average word length, or connector density crosses the highlight
    threshold. Order is preserved and at most ``highlight_cap`` are returned.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    highlights: list[str] = []
    for sentence in sentences:
        if len(highlights) >= hp.highlight_cap:
            break
        tokens = tokenize(sentence)
        flagged = (
            signal_repetition(tokens, hp).value > hp.highlight_repetition_min
            or signal_avg_word_length(tokens).value > hp.highlight_avg_word_length_min
            or signal_connector_overuse(tokens, hp).value > hp.highlight_connectors_min
        )
        if flagged:
            highlights.append(sentence)
    return highlights


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compute_score(text: str, hyperparameters: Hyperparameters | None = None) -> DetectionResult:
    """Score text for statistical signs of machine generation.

    Args:
        text: The prose to analyze. Callers are expected to reject blank input
            beforehand; blank text still scores without raising.
        hyperparameters: Optional tuning overrides. Uses the calibrated
            defaults if omitted.

    Returns:
        DetectionResult with the 0-100 score (rounded half-up), its verdict,
        up to five highlighted sentences, the per-signal sub-scores, and the
        raw signal values.
    """
    hp = hyperparameters or DEFAULT_HYPERPARAMETERS
    signals = extract_signals(text, hp)
    breakdown = normalize(signals, hp)
    score = _weighted_score(breakdown, hp)
    return DetectionResult(
        score=score,
        verdict=verdict_for(score, hp),
        highlights=find_highlights(to_sentences(text), hp),
        details=breakdown,
        signals={name: s.value for name, s in signals.items()},
    )


def analyze_text(text: str, hyperparameters: Hyperparameters | None = None) -> dict:
    """Score text and return a plain dict.

    Returns:
        Dict with keys: score (0-100), verdict, verdict_legacy, highlights,
        details, signals.
    """
    return compute_score(text, hyperparameters).to_payload()
