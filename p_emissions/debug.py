"""Debug output helpers for per-unit calculation snapshots.

WARNING: For local development and debugging only. Never enable in production.
"""

import logging
from datetime import UTC, datetime

from p_emissions.config import DebugConfig
from p_emissions.models.results import Result

logger = logging.getLogger(__name__)


def save_debug_result(result: Result, name: str, config: DebugConfig) -> None:
    """Save a JSON snapshot of a result if debug output is enabled.

    Args:
        result: Result aggregate to save
        name: Descriptive name (e.g., "99_final_result")
        config: Debug configuration
    """
    if not config.enabled:
        return

    output_dir = config.output_dir / f"{result.unit.id}_{result.period.year}"
    output_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now(UTC).strftime("%H%M%S")
    output_path = output_dir / f"{timestamp}_{name}.json"

    try:
        output_path.write_text(result.model_dump_json(indent=2))
        logger.debug(f"Saved debug output: {output_path}")
    except Exception as e:
        logger.warning(f"Failed to save debug output {name}: {e}")
