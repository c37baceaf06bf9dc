"""Application layer: ports and the dispatch use cases."""
