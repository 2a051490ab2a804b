"""Application services: publish, consume and query pipelines."""
