"""
Batch runner - evaluate many building descriptions.

Handles:
- Parallel execution across processes (engine runs are CPU bound)
- Sequential fallback for max_workers == 1 or a broken pool
- Per-item error capture: one invalid description does not abort the batch
- Results returned in input order
"""

import logging
import time
from concurrent.futures import ProcessPoolExecutor
from concurrent.futures.process import BrokenProcessPool
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Union

from ..core.config import settings
from ..core.models import BuildingDescription
from ..utils.validation import InvalidInputError
from .engine import EnergySimulationEngine
from .results import EnergyDemandResult

logger = logging.getLogger(__name__)


@dataclass
class BatchItemResult:
    """Outcome of one description in a batch."""
    index: int
    name: str
    success: bool
    result: Optional[EnergyDemandResult] = None
    error_message: Optional[str] = None
    error_field: Optional[str] = None


# ============================================================================
# MODULE-LEVEL FUNCTION FOR ProcessPoolExecutor
# Must be at module level (not inside class) to be picklable
# ============================================================================


def _simulate_one(
    index: int,
    description: Union[BuildingDescription, Dict[str, Any]],
) -> BatchItemResult:
    """Run the engine on one description, capturing invalid input."""
    name = description.name if isinstance(description, BuildingDescription) else str(description.get("name", ""))
    try:
        result = EnergySimulationEngine().run(description)
    except InvalidInputError as e:
        return BatchItemResult(
            index=index,
            name=name,
            success=False,
            error_message=str(e),
            error_field=e.field,
        )
    return BatchItemResult(index=index, name=name, success=True, result=result)


class BatchRunner:
    """
    Run the energy engine over many descriptions.

    Usage:
        runner = BatchRunner(max_workers=4)
        items = runner.run_batch(descriptions)
        demands = [i.result.annual_space_heating_kwh for i in items if i.success]
    """

    def __init__(self, max_workers: Optional[int] = None):
        self.max_workers = max_workers or settings.max_workers

    def run_batch(
        self,
        descriptions: Sequence[Union[BuildingDescription, Dict[str, Any]]],
    ) -> List[BatchItemResult]:
        """
        Evaluate descriptions, in parallel where possible.

        Args:
            descriptions: Descriptions or dicts to evaluate

        Returns:
            One BatchItemResult per input, in input order
        """
        if not descriptions:
            return []

        start = time.time()
        workers = min(self.max_workers, len(descriptions))

        if workers <= 1:
            results = [_simulate_one(i, d) for i, d in enumerate(descriptions)]
        else:
            logger.info(f"Running {len(descriptions)} descriptions with {workers} workers")
            try:
                with ProcessPoolExecutor(max_workers=workers) as executor:
                    results = list(executor.map(
                        _simulate_one, range(len(descriptions)), descriptions
                    ))
            except (BrokenProcessPool, OSError) as e:
                logger.error(f"Process pool failed, running sequentially: {e}")
                results = [_simulate_one(i, d) for i, d in enumerate(descriptions)]

        failed = sum(1 for r in results if not r.success)
        logger.info(
            f"Batch complete: {len(results) - failed}/{len(results)} succeeded "
            f"in {time.time() - start:.2f}s"
        )
        return results
