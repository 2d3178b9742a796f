"""ViewModel package for UI state and display projections.

Call context:
    ``ragdesk/web_ui/main.py`` builds metric cards and reads settings through
    this package.

Dependencies:
    Modules in this package depend on domain types and formatting helpers
    only. I/O adapters and use-case orchestration remain outside.
"""
