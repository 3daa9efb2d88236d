"""Application layer: capability ports and the dispatch use case."""
