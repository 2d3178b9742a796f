"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations of ``RagPort`` (HTTP and an offline
    double) used by use cases.

Dependencies:
    ``rag_rest`` and ``http_client`` depend on ``httpx``; ``rag_mock`` is pure
    ``asyncio``.

Call context:
    Imported by the web entrypoint (for runtime wiring) and by tests (for
    doubles and transport-level behavior verification).
"""
