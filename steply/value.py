"""Dynamic values passed between inputs, components and layers.

A value is one of the plain Python types below:

* ``None``: no value
* ``str``: text
* ``bool``: a flag
* ``int``: a number
* ``list[str]``: a list of strings
* ``dict[str, str]``: an ordered mapping of strings
"""

from __future__ import annotations

from typing import Dict, List, Union

Value = Union[None, str, bool, int, List[str], Dict[str, str]]


def is_empty(value: Value) -> bool:
    """Return True if ``value`` holds nothing.

    Booleans and numbers are never empty.
    """
    if value is None:
        return True
    if isinstance(value, (bool, int)):
        return False
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    raise TypeError(f"unsupported value type: {type(value).__name__}")