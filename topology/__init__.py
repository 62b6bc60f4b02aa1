"""Text tokenizing, fingerprinting, deduplication, clustering, taxonomy discovery and caching."""

__version__ = "0.1.0"

__all__ = [
    "cache",
    "clustering",
    "discover",
    "lsh",
    "minhash",
    "nmf",
    "sampling",
    "simhash",
    "storage",
    "string_distance",
    "taxonomy",
    "tfidf",
    "tokenizer",
    "url_normalize",
]