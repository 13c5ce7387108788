"""Replacement templates with ``$N`` / ``${name}`` capture references.

The syntax follows the common regex-replacement convention:

* ``$1`` / ``${1}``: numbered group, ``$0`` is the whole match;
* ``$name`` / ``${name}``: named group;
* ``$$``: a literal dollar sign.

A bare reference takes the longest run of ``[0-9A-Za-z_]`` after the ``$``,
so ``$1a`` names the group ``1a``; use ``${1}a`` to follow a group with
letters. References to groups that do not exist, or did not participate in
the match, expand to the empty string. A ``$`` that does not start a valid
reference is kept literally.
"""

from __future__ import annotations

import re

_REFERENCE_RE = re.compile(r"\$(?:\$|\{(?P<braced>[0-9A-Za-z_]+)\}|(?P<bare>[0-9A-Za-z_]+))")


def _group(match: re.Match[str], name: str) -> str:
    key: int | str = int(name) if name.isdigit() else name
    try:
        value = match.group(key)
    except IndexError:
        return ""
    return value or ""


def expand(template: str, match: re.Match[str]) -> str:
    """Expand capture references in *template* against *match*."""
    if "$" not in template:
        return template

    def substitute(ref: re.Match[str]) -> str:
        name = ref.group("braced") or ref.group("bare")
        if name is None:
            return "$"
        return _group(match, name)

    return _REFERENCE_RE.sub(substitute, template)
