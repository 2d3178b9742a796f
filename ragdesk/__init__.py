"""Client-side orchestration for a RAG document store and its benchmark runs."""
