"""
Demo orchestrator: create the index, load the sample corpus, run one query.

Any failure aborts the whole run; there is no partial-success continuation.
"""

import argparse
import sys
from typing import List, Optional, Sequence, TextIO, Tuple

from .config import AppConfig, load_config, validate_config
from .corpus import DEFAULT_QUERY, SAMPLE_CORPUS
from .errors import ConfigError, RedisKnnError
from .ratelimit import RateLimiter
from ..util.logging import logger, sanitize_config
from ..vector.embeddings import IEmbeddingProvider, get_embedding_provider
from ..vector.index import IVectorIndex
from ..vector.types import SearchResult


class VectorDemo:
    """Sequences schema setup, bulk loading and a sample query."""

    def __init__(self, index: IVectorIndex, embedder: IEmbeddingProvider,
                 rate_limiter: RateLimiter, out: TextIO = None):
        self.index = index
        self.embedder = embedder
        self.rate_limiter = rate_limiter
        self.out = out or sys.stdout

    def _print(self, line: str = "") -> None:
        print(line, file=self.out)

    def setup(self) -> None:
        self.index.create_schema()
        self._print("Schema creation successful!")

    def load(self, corpus: Sequence[Tuple[str, Sequence[str]]]) -> List[str]:
        """Embed and store every text; returns the generated document ids."""
        doc_ids = []
        for category, texts in corpus:
            self._print(f"Adding data for category: {category}")
            for text in texts:
                self.rate_limiter.acquire()
                vector = self.embedder.embed(text)
                doc_ids.append(self.index.add_document(text, vector))

        logger.log_index_operation("load", self.index.schema.name, {"documents": len(doc_ids)})
        self._print("All data loaded successfully!")
        return doc_ids

    def query(self, text: str, limit: int = 5) -> SearchResult:
        self.rate_limiter.acquire()
        vector = self.embedder.embed(text)
        return self.index.search(vector, limit=limit)

    def report(self, result: SearchResult) -> None:
        text_field = self.index.schema.text_field
        self._print("Search Results:")
        self._print(f"Total Results: {result.total}")
        for i, hit in enumerate(result, start=1):
            self._print(f"{i}. {hit.document.fields[text_field]}")
            self._print(f"{hit.distance}")
            self._print()

    def run(self, corpus: Sequence[Tuple[str, Sequence[str]]] = SAMPLE_CORPUS,
            query_text: str = DEFAULT_QUERY, limit: int = 5) -> SearchResult:
        self.setup()
        self.load(corpus)
        self._print("Data Added Successfully ..!!")
        result = self.query(query_text, limit)
        self.report(result)
        return result


def build_demo(config: AppConfig, client=None, out: TextIO = None) -> VectorDemo:
    """Wire components from configuration."""
    from ..vector import get_vector_index

    index = get_vector_index(config, client=client)
    if config.vector_backend == "redis":
        print("Connection established successfully!", file=out or sys.stdout)
    embedder = get_embedding_provider(config.embedding)
    limiter = RateLimiter(config.min_embed_interval_sec)
    return VectorDemo(index, embedder, limiter, out=out)


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Load sample sentences into a vector index and run a KNN query"
    )
    parser.add_argument("--query", default=DEFAULT_QUERY, help="Query sentence")
    parser.add_argument("--limit", type=positive_int, default=5, help="Maximum results to print")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None, config: Optional[AppConfig] = None,
         client=None, out: TextIO = None) -> int:
    """Run the demo; returns the process exit status."""
    args = parse_args(argv)

    try:
        if config is None:
            config = load_config()
        logger.set_debug(config.debug)

        issues = validate_config(config)
        if issues:
            raise ConfigError("Invalid configuration: " + "; ".join(issues))
        logger.log_operation("config.load", "success", sanitize_config(config.to_dict()))

        demo = build_demo(config, client=client, out=out)
        demo.run(SAMPLE_CORPUS, args.query, args.limit)
    except RedisKnnError as e:
        logger.log_operation("demo.run", "failed", {"error_type": type(e).__name__, "error": str(e)})
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
