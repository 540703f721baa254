"""
RediSearch KNN demo: embeds sample sentences, stores them in a vector index
and runs a nearest-neighbour query.
"""

__version__ = "1.0.0"
