"""Report building blocks: queries, aggregation and the run pipeline."""
