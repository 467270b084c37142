"""
Search indexing and query engine package.

This package provides a pure-Python lexical search stack:
- analyzers: Tokenizers and filters (lowercase, length, stop words)
- scoring: TF-IDF statistics and field boosts
- snippet: Highlighted excerpts around matches
- search_index: In-memory inverted index over markdown specs
"""
