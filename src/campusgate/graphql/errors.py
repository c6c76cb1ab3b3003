"""
Error formatting for GraphQL responses.
"""

from typing import Any, Dict, Mapping

from graphql import GraphQLError


def normalize_error(error: GraphQLError) -> Dict[str, Any]:
    """
    Format an execution error for the response ``errors`` list.

    Errors raised from a structured backend failure, i.e. whose original
    error carries an ``error`` envelope with ``id``, ``code`` and
    ``description``, become ``{message, code, description, path}`` with the
    envelope's ``id`` as message. Anything else keeps the engine's default
    formatting.
    """
    data = error.formatted
    envelope = getattr(error.original_error, "error", None)
    if not isinstance(envelope, Mapping) or "id" not in envelope:
        return data

    return {
        "message": envelope["id"],
        "code": envelope.get("code"),
        "description": envelope.get("description"),
        "path": data.get("path"),
    }
