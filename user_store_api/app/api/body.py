"""
Request body helpers shared by the endpoint modules.
"""

from typing import Any, Dict


def as_object(body: Any) -> Dict[str, Any]:
    """Return ``body`` if it is a JSON object, otherwise an empty mapping.

    Arrays, scalars and a missing body carry no fields to merge or read.
    """
    if isinstance(body, dict):
        return body
    return {}
