"""Key-casing translation between the wire (camelCase) and storage (snake_case).

Mappings are translated deeply. Lists are walked one level: each element is
translated, so a list of records is handled, but list values are not otherwise
reshaped. Scalars pass through untouched.

Only a lowercase letter after an underscore marks a word boundary, and only an
uppercase letter starts one, so ``to_internal(to_external(key)) == key`` for
any snake_case key and keys already in the target convention are left alone.
"""

import re

_SNAKE_BOUNDARY = re.compile(r"_([a-z])")
_CAMEL_BOUNDARY = re.compile(r"([A-Z])")


def camelize_key(key: str) -> str:
    return _SNAKE_BOUNDARY.sub(lambda m: m.group(1).upper(), key)


def snakify_key(key: str) -> str:
    return _CAMEL_BOUNDARY.sub(lambda m: "_" + m.group(1).lower(), key)


def _translate(value, convert_key):
    if isinstance(value, dict):
        return {
            convert_key(k) if isinstance(k, str) else k: _translate(v, convert_key)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [
            _translate(item, convert_key) if isinstance(item, dict) else item
            for item in value
        ]
    return value


def to_external(value):
    """snake_case keys → camelCase keys."""
    return _translate(value, camelize_key)


def to_internal(value):
    """camelCase keys → snake_case keys."""
    return _translate(value, snakify_key)
