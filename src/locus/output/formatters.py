"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich tables and panels) or for
machines (``--json``). The formatter picks the mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from locus.services.result import ServiceResult


def format_result(
    result: ServiceResult,
    *,
    json_output: bool = False,
    verbose: bool = False,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return the full result as indented JSON.
        verbose: Show extra columns and error detail in human output.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    from locus.output.renderers import render_result

    return render_result(result, verbose=verbose)
