"""Automatic taxonomy discovery and BM25 classification against a taxonomy."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from topology import clustering, sampling, tfidf, tokenizer
from topology.taxonomy import Category, Taxonomy

UNCATEGORIZED = "Uncategorized"


@dataclass
class DiscoverConfig:
    """Settings for taxonomy discovery."""

    k: int = 15
    sample_size: int = 500
    label_terms: int = 3
    keywords_per_cluster: int = 20
    linkage: clustering.Linkage = clustering.Linkage.WARD
    seed: int = 42


def capitalize(s: str) -> str:
    """Uppercase the first character and leave the rest unchanged."""
    if not s:
        return ""
    return s[0].upper() + s[1:]


def _discovered(categories: list[Category]) -> Taxonomy:
    return Taxonomy(name="discovered", version="auto", categories=categories)


def _single_cluster_taxonomy(corpus: tfidf.Corpus, doc_idx: int) -> Taxonomy:
    top = corpus.top_terms(doc_idx, 20)
    keywords = [term for term, _ in top]
    label = ", ".join(capitalize(term) for term, _ in top[:3])
    return _discovered([Category(name=label, keywords=keywords, children=[])])


def discover_taxonomy(texts: Sequence[str], config: DiscoverConfig | None = None) -> Taxonomy:
    """Discover categories from raw texts.

    Texts are tokenized and, if there are more than ``config.sample_size``,
    sampled; the sample is clustered with HAC on cosine distances of TF-IDF
    vectors, the dendrogram is cut at ``k`` clusters and each cluster is
    labelled by its heaviest terms.
    """
    config = config or DiscoverConfig()
    n = len(texts)
    if n == 0:
        return _discovered([])

    all_tokens = [tokenizer.tokenize(text) for text in texts]

    corpus = tfidf.Corpus()
    for tokens in all_tokens:
        corpus.add_document(tokens)

    if n > config.sample_size:
        indices = sampling.random_sample(n, config.sample_size, config.seed)
        sample_tokens = [all_tokens[i] for i in indices]
    else:
        sample_tokens = list(all_tokens)

    sample_n = len(sample_tokens)
    if sample_n < 2:
        return _single_cluster_taxonomy(corpus, 0)

    sample_corpus = tfidf.Corpus()
    for tokens in sample_tokens:
        sample_corpus.add_document(tokens)
    vectors = [sample_corpus.tfidf_vector(i) for i in range(sample_n)]

    distances = clustering.cosine_distance_matrix(vectors)
    k = min(config.k, sample_n)
    dendrogram = clustering.hac(distances, sample_n, config.linkage)
    labels = clustering.cut_tree(dendrogram, k)

    actual_k = max(labels) + 1 if labels else 0
    categories: list[Category] = []
    for cluster_idx in range(actual_k):
        members = [i for i, label in enumerate(labels) if label == cluster_idx]
        if not members:
            continue

        merged: dict[str, float] = {}
        for i in members:
            for term, weight in vectors[i].items():
                merged[term] = merged.get(term, 0.0) + weight

        ranked = sorted(merged.items(), key=lambda tw: tw[1], reverse=True)
        keywords = [term for term, _ in ranked[: config.keywords_per_cluster]]
        label = ", ".join(capitalize(term) for term, _ in ranked[: config.label_terms])
        categories.append(Category(name=label, keywords=keywords, children=[]))

    return _discovered(categories)


def classify_against_taxonomy(
    texts: Sequence[str], taxonomy: Taxonomy, threshold: float
) -> list[tuple[str, str, float]]:
    """Assign each text to its best BM25-matching category.

    Returns ``(category_name, hierarchy_path, score)`` per text; texts whose
    best score is below ``threshold`` (or zero) are ``Uncategorized`` with 0.0.
    """
    flat = taxonomy.flatten()
    corpus = tfidf.Corpus()
    for _, keywords in flat:
        corpus.add_document(keywords)

    results: list[tuple[str, str, float]] = []
    for text in texts:
        tokens = tokenizer.tokenize(text)
        best_score = 0.0
        best_category = ""
        best_path = ""
        for doc_idx, (path, _) in enumerate(flat):
            score = corpus.bm25_score(doc_idx, tokens)
            if score > best_score:
                best_score = score
                best_category = path.split(" > ")[-1]
                best_path = path
        if best_score >= threshold:
            results.append((best_category, best_path, best_score))
        else:
            results.append((UNCATEGORIZED, UNCATEGORIZED, 0.0))
    return results