"""Console scripts for the LLM provider registry."""
