"""
L1 Domain — Apply configured version pins to the tool catalogue (pure).
"""

from __future__ import annotations

from tfsetup.core.models.settings import ToolOverrides
from tfsetup.core.models.tool import ToolSpec


def apply_overrides(
    specs: dict[str, ToolSpec],
    overrides: dict[str, ToolOverrides],
) -> dict[str, ToolSpec]:
    """Return a new catalogue with per-tool pins applied.

    Order is preserved. Overrides naming a tool we don't manage raise.

    Raises:
        ValueError: Unknown tool name, or a pin that isn't a dotted
            numeric version.
    """
    unknown = sorted(set(overrides) - set(specs))
    if unknown:
        raise ValueError(
            f"Unknown tool(s) in overrides: {', '.join(unknown)}. "
            f"Managed tools: {', '.join(specs)}"
        )

    result: dict[str, ToolSpec] = {}
    for name, spec in specs.items():
        pins = overrides.get(name)
        if pins is None:
            result[name] = spec
            continue
        update = pins.model_dump(exclude_none=True)
        # model_copy skips validation; re-validate so bad pins surface here.
        result[name] = ToolSpec.model_validate({**spec.model_dump(), **update})
    return result
