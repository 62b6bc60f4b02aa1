# topology

A Python library for content topology, classification and deduplication.
It tokenizes text, fingerprints it, finds near-duplicates, scores
relevance, clusters documents into a taxonomy, discovers topics and keeps
expensive results in an SQLite cache. Everything is deterministic: the
same input and seed always give the same result.

The only runtime dependency is `regex`.

```
pip install .
pip install ".[test]"   # with pytest, to run the tests
```

## What is inside

| Module | Purpose |
| --- | --- |
| `topology.tokenizer` | Unicode word tokenization with stopword filtering, character shingles, word n-grams |
| `topology.simhash` | SipHash-1-3, 64-bit SimHash fingerprints, Hamming distance, hex encoding |
| `topology.minhash` | MinHash signatures and Jaccard estimation |
| `topology.lsh` | Locality-sensitive hashing for MinHash signatures and SimHash fingerprints |
| `topology.sampling` | Seeded random, systematic, stratified and reservoir sampling |
| `topology.url_normalize` | URL normalization for deduplication, canonical keys, slugs |
| `topology.tfidf` | A document corpus with IDF, TF-IDF vectors and BM25 scoring |
| `topology.taxonomy` | Category trees, flattening to paths, JSON loading and saving |
| `topology.clustering` | Hierarchical agglomerative clustering and cosine distance matrices |
| `topology.nmf` | Non-negative matrix factorization for topic modeling |
| `topology.discover` | Automatic taxonomy discovery and BM25 classification |
| `topology.cache` | Artifact kinds, cache metadata, content and argument hashing |
| `topology.storage` | An SQLite-backed artifact cache |
| `topology.string_distance` | Levenshtein, Jaro-Winkler and bigram cosine similarity |

## Tokenizing

```python
from topology.tokenizer import tokenize, shingles, word_ngrams, is_stopword

tokenize("Hello World! This is a test.")      # ['hello', 'world', 'test']
shingles("hello", 3)                          # ['hel', 'ell', 'llo']
word_ngrams(["rust", "plugin", "system"], 2)  # ['rust plugin', 'plugin system']
is_stopword("the")                            # True
```

Words are split on Unicode word boundaries and lower-cased; words shorter
than two bytes in UTF-8 and common English stopwords are dropped.
`shingles` and `word_ngrams` return the whole input as a single item when
it is shorter than `n`, and raise `ValueError` for `n <= 0`.

## Near-duplicate detection

SimHash turns a token list into a 64-bit fingerprint. Similar texts give
fingerprints that differ in only a few bits.

```python
from topology.simhash import (
    simhash, simhash_uniform, hamming_distance, is_near_duplicate,
    fingerprint_to_hex, hex_to_fingerprint,
)
from topology.tokenizer import tokenize

a = simhash_uniform(tokenize("The quick brown fox jumps over the lazy dog"))
b = simhash_uniform(tokenize("The quick brown fox jumped over the lazy dog"))
hamming_distance(a, b)
is_near_duplicate(a, b, 3)
fingerprint_to_hex(a)                  # 16 lowercase hex digits
hex_to_fingerprint("deadbeef12345678") # 0xdeadbeef12345678; None if not valid hex

weighted = simhash(["rust", "common"], {"rust": 5.0, "common": 0.1})
```

In `simhash`, tokens missing from the weight mapping weigh 1.0. The
underlying hash, `siphash13(data, key0, key1)`, is also available, along
with `hash_str` and `hash_u64s` helpers.

To avoid comparing every pair, put fingerprints in an LSH index and ask
it for candidate pairs:

```python
from topology.lsh import SimHashLshIndex

index = SimHashLshIndex.default_64()   # 16 bands of 4 bits
for item_id, fp in enumerate(fingerprints):
    index.insert(item_id, fp)
index.candidate_pairs()                # sorted [(i, j), ...] with i < j
index.query(fingerprints[0])           # set of item ids sharing a band
```

MinHash works the same way for set similarity:

```python
from topology.minhash import MinHasher
from topology.lsh import LshIndex

hasher = MinHasher.with_default_perm()   # 128 permutations
sig_a = hasher.signature(["a", "b", "c"])
sig_b = hasher.signature(["b", "c", "d"])
hasher.jaccard(sig_a, sig_b)             # estimate of the Jaccard index

index = LshIndex.default_128()           # 16 bands x 8 rows
index.insert(0, sig_a)
index.insert(1, sig_b)
index.query(sig_a)                       # contains 0
```

`LshIndex` raises `ValueError` for a signature shorter than
`bands * rows`; `MinHasher.jaccard` raises `ValueError` for signatures of
different lengths.

## URLs

```python
from topology.url_normalize import normalize, canonical_key, slugify, is_tracking_param

normalize("https://www.Example.COM:443/path?utm_source=x&id=1")
# 'https://example.com/path?id=1'
canonical_key("https://www.example.com/path?a=1")
# 'example.com/path?a=1'
slugify("AI & ML")
# 'ai-ml'
is_tracking_param("fbclid")
# True
```

Normalization lower-cases scheme and host, drops ports 80 and 443 (and
the scheme's default port), the fragment, tracking parameters (`utm_*`,
`fbclid`, `gclid` and others), trailing slashes and a leading `www.`, and
sorts the remaining query parameters by name. A URL without `://` is
given the `https` scheme. An empty or unparsable URL gives `None`.

## TF-IDF and BM25

```python
from topology.tfidf import Corpus

corpus = Corpus()
corpus.add_document(["rust", "programming", "language"])
corpus.add_document(["rust", "systems", "performance"])
corpus.add_document(["javascript", "web", "programming"])

corpus.num_docs                          # 3
corpus.idf("systems")                    # ln((N - df + 0.5) / (df + 0.5) + 1)
corpus.tfidf_vector(0)
corpus.top_terms(0, 2)
corpus.bm25_score(1, ["rust", "systems"])             # k1=1.2, b=0.75
corpus.bm25_score(1, ["rust"], k1=2.0, b=0.5)
corpus.token_weights(["rust", "systems"])
```

A corpus can be stored with `to_dict()` and restored with
`Corpus.from_dict(...)`, which raises `ValueError` on malformed data.

## Discovering and applying a taxonomy

```python
from topology.discover import DiscoverConfig, discover_taxonomy, classify_against_taxonomy

texts = [
    "rust systems memory safety ownership borrow checker compiler",
    "cooking recipe pasta italian sauce ingredients kitchen chef",
    "astronomy telescope star galaxy nebula planet cosmos universe",
]
taxonomy = discover_taxonomy(texts, DiscoverConfig(k=3))
for category, path, score in classify_against_taxonomy(texts, taxonomy, 0.5):
    print(category, path, score)
```

`DiscoverConfig` defaults to `k=15`, `sample_size=500`, `label_terms=3`,
`keywords_per_cluster=20`, Ward linkage and seed 42. Discovery tokenizes
the texts, samples them if there are more than `sample_size`, builds
TF-IDF vectors, runs hierarchical clustering on cosine distances, cuts
the tree at `k` clusters and names each cluster after its strongest
terms. The result is a taxonomy named `discovered`. Texts whose best
BM25 score is below the threshold are labelled `Uncategorized` with a
score of 0.0.

A taxonomy of your own can be read from JSON:

```python
from topology.taxonomy import Category, Taxonomy, load_taxonomy, parse_taxonomy

taxonomy = load_taxonomy("taxonomy.json")
taxonomy.flatten()          # [('Beta', [...]), ('Beta > Gamma', [...]), ...]
taxonomy.category_names()   # top-level names only
taxonomy.to_json()
```

The JSON holds `name`, `version` and `categories`; each category has a
`name`, `keywords` and optional `children`. Unreadable files and
malformed input raise `TaxonomyError`.

## Clustering and topics

```python
from topology.clustering import Dendrogram, Linkage, cosine_distance_matrix, hac, cut_tree
from topology.nmf import nmf

distances = cosine_distance_matrix(vectors)   # condensed upper triangle
dendrogram = hac(distances, len(vectors), Linkage.parse("ward"))
labels = cut_tree(dendrogram, 5)              # one label 0..k-1 per item
Dendrogram.from_dict(dendrogram.to_dict())

result = nmf(vectors, 5, 200, 5000)           # k, iterations, vocabulary limit
result.top_terms(0, 10)
result.dominant_topics()
```

Linkage methods are `single`, `complete`, `average` and `ward`;
`Linkage.parse` is case-insensitive and raises `ValueError` for other
names. The NMF vocabulary keeps the terms with the highest document
frequency.

## Sampling

```python
from topology.sampling import (
    Strategy, random_sample, systematic_sample, stratified_sample, reservoir_sample,
)

random_sample(100, 10, 42)        # ten sorted indices in range(100)
systematic_sample(100, 10, 42)    # roughly every tenth index
reservoir_sample(1000, 50, 42)
stratified_sample({"a": list(range(70)), "b": list(range(70, 100))}, 10, 42)
Strategy.parse("stratified")
```

All samplers take a seed and return the same indices for the same seed.
Asking for at least as many items as there are returns all of them.

## String similarity

```python
from topology.string_distance import Metric, similarity, normalized_levenshtein, jaro_winkler

similarity("kitten", "sitting", Metric.parse("levenshtein"))
similarity("martha", "marhta", "jw")
similarity("night", "nacht", Metric.COSINE)
Metric.all_names()   # ['levenshtein', 'jaro-winkler', 'cosine']
```

Accepted names include the aliases `lev`, `jaro_winkler`, `jw` and `cos`,
in any case. Every metric returns a value between 0.0 and 1.0, where 1.0
means identical. Cosine similarity compares character bigrams.

## Caching artifacts

Expensive results can be kept in an SQLite file, keyed by what they were
built from:

```python
from topology.cache import ArtifactKind, CacheMeta, args_hash, content_hash, is_valid
from topology.storage import CacheDb

texts = ["hello world", "foo bar"]
data_hash = content_hash(texts)
params_hash = args_hash({"clusters": 15, "linkage": "ward"})

with CacheDb("topology-cache.db") as db:
    kind = ArtifactKind.parse("corpus")
    db.put(kind, CacheMeta.create(data_hash, len(texts), params_hash), b"payload")
    hit = db.get(kind, data_hash, params_hash)
    if hit is not None:
        meta, payload = hit
        assert is_valid(meta, data_hash, params_hash)
    db.info()              # ArtifactInfo records, newest first
    db.db_size_bytes()
    db.invalidate(kind)    # or db.invalidate() to clear everything
```

Artifact kinds are `corpus`, `dendrogram`, `taxonomy` and `fingerprints`.
A cached artifact is valid only when the content hash, the argument hash
and the package version (0.1.0) all match. `args_hash` also accepts
dataclass instances. Database failures raise `StorageError`; use
`":memory:"` as the path for a throwaway cache.

## What it does not do

This is a library only. It has no command-line program, no server and no
editor integration, and it does not read records from standard input or
write result tables: reading your data, choosing fields and putting the
pieces above together is left to the calling code.