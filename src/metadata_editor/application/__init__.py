"""Application layer – search engine and record management use cases."""
