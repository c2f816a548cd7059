"""Relevance search over measurement entries.

Scoring is additive and rule based, all case-insensitive on the trimmed query:

    exact label          +1000
    label prefix          +500
    word prefix           +200   (words split on whitespace, '-' and '_')
    label substring       +100
    source substring       +50
    rig substring          +30
    form substring         +20

Entries scoring 0 are dropped. Ties keep input order.
"""

import re

SCORE_EXACT = 1000
SCORE_PREFIX = 500
SCORE_WORD_PREFIX = 200
SCORE_CONTAINS = 100
SCORE_SOURCE = 50
SCORE_RIG = 30
SCORE_FORM = 20

WORD_SPLIT_RE = re.compile(r"\s+|[-_]")
VARIANT_RE = re.compile(r"\s*\([^)]*\)\s*")
BRAND_SPLIT_RE = re.compile(r"[ \-(]")


def normalize_model_name(label):
    """Drop variant details: ``"Sony WH-1000XM4 (ANC ON)"`` -> ``"Sony WH-1000XM4"``."""
    return VARIANT_RE.sub(" ", label).strip()


def score(entry, query):
    query = query.strip().lower()
    if not query:
        return 0

    label = entry.label.lower()
    total = 0
    if label == query:
        total += SCORE_EXACT
    if label.startswith(query):
        total += SCORE_PREFIX
    if any(word.startswith(query) for word in WORD_SPLIT_RE.split(label) if word):
        total += SCORE_WORD_PREFIX
    if query in label:
        total += SCORE_CONTAINS
    if query in entry.source.lower():
        total += SCORE_SOURCE
    if query in entry.rig.lower():
        total += SCORE_RIG
    if query in entry.form.lower():
        total += SCORE_FORM
    return total


class MeasurementSearch:
    """Search, facet and autocomplete over an immutable entry snapshot."""

    def __init__(self, entries):
        self._entries = tuple(entries)

    @property
    def entries(self):
        return self._entries

    def __len__(self):
        return len(self._entries)

    def search(self, query, max_results=50):
        if not query or not query.strip():
            return []
        scored = [(score(e, query), e) for e in self._entries]
        scored = [item for item in scored if item[0] > 0]
        scored.sort(key=lambda item: item[0], reverse=True)
        return [e for _, e in scored[:max_results]]

    def filter_by_source(self, source):
        return [e for e in self._entries if e.source.lower() == source.lower()]

    def filter_by_rig(self, rig):
        return [e for e in self._entries if e.rig.lower() == rig.lower()]

    def filter_by_form(self, form):
        return [e for e in self._entries if e.form.lower() == form.lower()]

    def get_all_sources(self):
        return sorted({e.source for e in self._entries})

    def get_all_rigs(self):
        return sorted({e.rig for e in self._entries})

    def get_all_forms(self):
        return sorted({e.form for e in self._entries})

    def get_suggestions(self, query, max_suggestions=10):
        if not query or not query.strip():
            return []
        prefix = query.lower()
        labels = {e.label for e in self._entries if e.label.lower().startswith(prefix)}
        return sorted(labels)[:max_suggestions]

    def search_brands(self, query, max_results=50):
        """Distinct brands (first token of a label) matching ``query``."""
        if not query or not query.strip():
            return []
        q = query.strip().lower()
        brands = {BRAND_SPLIT_RE.split(e.label, maxsplit=1)[0].strip() for e in self._entries}
        matches = [b for b in brands if b and q in b.lower()]

        def rank(brand):
            lowered = brand.lower()
            if lowered == q:
                return SCORE_EXACT
            if lowered.startswith(q):
                return SCORE_PREFIX
            return SCORE_CONTAINS

        matches.sort(key=lambda b: (-rank(b), b))
        return matches[:max_results]

    def search_models_by_brand(self, brand, model_query=""):
        if not brand or not brand.strip():
            return []
        b = brand.strip().lower()
        m = model_query.strip().lower()

        def matches(entry):
            label = entry.label.lower()
            in_brand = label.startswith(b) or f" {b} " in label or f"-{b}-" in label
            if not in_brand:
                return False
            return not m or m in normalize_model_name(entry.label).lower()

        def rank(entry):
            label = entry.label.lower()
            if m and label == f"{b} {m}":
                return 2000
            if m and label.startswith(f"{b} {m}"):
                return 1500
            if label.startswith(f"{b} "):
                return SCORE_EXACT
            return SCORE_CONTAINS

        found = [e for e in self._entries if matches(e)]
        found.sort(key=lambda e: (-rank(e), e.label))
        return found

    def group_by_model(self, entries=None):
        groups = {}
        for entry in self._entries if entries is None else entries:
            groups.setdefault(normalize_model_name(entry.label), []).append(entry)
        return groups

    def get_variants_for_model(self, model):
        wanted = normalize_model_name(model).lower()
        return [e for e in self._entries if normalize_model_name(e.label).lower() == wanted]

    def statistics(self):
        return {
            "total_entries": len(self._entries),
            "unique_headphones": len({e.label for e in self._entries}),
            "sources": self.get_all_sources(),
            "forms": self.get_all_forms(),
            "rigs": self.get_all_rigs(),
        }
