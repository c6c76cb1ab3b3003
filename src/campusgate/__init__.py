"""
Campus Gateway - GraphQL front for the courses and students services.

Merges per-resource schema fragments into one GraphQL API and routes every
field to its backend REST call.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
