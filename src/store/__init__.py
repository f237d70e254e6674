"""In-memory registry stores.

This package keeps live file-metadata entries and their upload history.
It powers lookup, copy, ranked search, and point-in-time rollback.
"""
