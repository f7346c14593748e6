"""Structural checks on tool arguments.

Only presence and container shape are checked here; field contents are left
to Linear.
"""

from typing import Any, Mapping, Sequence

from ..exceptions import ValidationError


def is_missing(value: Any) -> bool:
    """``None``, empty strings and empty lists all count as missing."""
    if value is None:
        return True
    if isinstance(value, (str, list, tuple)) and len(value) == 0:
        return True
    return False


def validate_required_params(
    args: Mapping[str, Any],
    required: Sequence[str],
    prefix: str = "",
) -> None:
    """Raise ValidationError naming the first missing field in ``required``.

    Args:
        args: Tool arguments.
        required: Field names, checked in order.
        prefix: Prepended to the reported field name, e.g. ``issues[2].``.
    """
    for name in required:
        if is_missing(args.get(name)):
            field = f"{prefix}{name}"
            raise ValidationError(f"Missing required parameter: {field}", field=field)


def require_list(args: Mapping[str, Any], name: str) -> list:
    value = args.get(name)
    if not isinstance(value, list):
        raise ValidationError(f"{name} parameter must be an array", field=name)
    return value


def require_object(args: Mapping[str, Any], name: str) -> dict:
    value = args.get(name)
    if not isinstance(value, dict):
        raise ValidationError(f"{name} parameter must be an object", field=name)
    return value
