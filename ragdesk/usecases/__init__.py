"""Use-case layer for RAG client workflows.

Each module wraps one ``RagPort`` call, translating adapter failures into
``UseCaseError`` without touching UI state.
"""
