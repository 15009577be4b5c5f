"""
Variable reference expansion.

Values may refer to other variables as ``${NAME}`` or ``$NAME``. Expansion runs as an
iterative fixed point over the whole mapping so that forward references and chains
resolve regardless of the order in which they were declared. The number of passes is
capped, which guarantees termination for cyclic references without detecting them;
references left over by a cycle expand to the empty string.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Mapping, Optional

from .constants import KEY_PATTERN, MAX_INTERPOLATION_PASSES

logger = logging.getLogger(__name__)

# The braced alternative is tried first at each "$". The bare alternative can never
# start with "{", so "$NAME{X}" expands NAME and keeps "{X}" as literal text.
_REFERENCE_RE = re.compile(r"\$(?:\{(" + KEY_PATTERN + r")\}|(" + KEY_PATTERN + r"))")


def expand_references(
    value: str,
    values: Mapping[str, str],
    fallback: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Expand the references in a single value with one left-to-right sweep.

    Each reference is looked up in ``values``, then in ``fallback``, and expands to an
    empty string when absent from both. Replacement text is not scanned again.

    :param value: Text that may contain references.
    :type value: str
    :param values: Primary lookup mapping.
    :type values: Mapping[str, str]
    :param fallback: Secondary lookup mapping.
    :type fallback: Mapping[str, str] or None
    :return: Expanded text.
    :rtype: str
    """
    secondary: Mapping[str, str] = fallback if fallback is not None else {}

    def _lookup(match: re.Match) -> str:
        name = match.group(1) or match.group(2)
        if name in values:
            return values[name]
        return secondary.get(name, "")

    return _REFERENCE_RE.sub(_lookup, value)


def interpolate(
    values: Mapping[str, str],
    fallback: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Expand variable references across a mapping.

    Each pass rewrites every value in insertion order, and a value sees the updates
    already made to earlier keys in the same pass. Expansion stops as soon as a pass
    changes nothing, or after :data:`~envresolve.constants.MAX_INTERPOLATION_PASSES`
    passes. A reference cycle is not an error: whatever references remain at that
    point expand to the empty string, so ``A=${B}`` with ``B=${A}`` yields two empty
    values and ``A=x${A}`` keeps only the text gathered within the pass budget.

    :param values: Mapping whose values may contain references.
    :type values: Mapping[str, str]
    :param fallback: Mapping consulted for names absent from ``values``, typically a
        snapshot of the process environment.
    :type fallback: Mapping[str, str] or None
    :return: New mapping with references expanded and no reference tokens left.
    :rtype: dict[str, str]
    """
    result: Dict[str, str] = dict(values)
    for _ in range(MAX_INTERPOLATION_PASSES):
        changed = False
        for key in list(result):
            current = result[key]
            expanded = expand_references(current, result, fallback)
            if expanded != current:
                result[key] = expanded
                changed = True
        if not changed:
            break
    else:
        logger.debug(
            "Interpolation stopped after %d passes without reaching a fixed point (%d variables)",
            MAX_INTERPOLATION_PASSES,
            len(result),
        )
    # Tokens still present belong to cycles.
    return {key: _REFERENCE_RE.sub("", value) for key, value in result.items()}
