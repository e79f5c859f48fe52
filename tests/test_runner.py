"""Tests for the batch runner."""

from concurrent.futures.process import BrokenProcessPool
from unittest.mock import patch

import pytest

from sapengine.simulation.runner import BatchRunner


class TestSequential:
    """Single-worker batches."""

    def test_valid_and_invalid(self, victorian_terrace, minimal_building):
        """Test one invalid description does not abort the batch."""
        bad = minimal_building.model_copy(update={"region": 99})

        items = BatchRunner(max_workers=1).run_batch([victorian_terrace, bad, minimal_building])

        assert [i.success for i in items] == [True, False, True]
        assert items[1].error_field == "region"
        assert items[1].result is None
        assert "region" in items[1].error_message

    def test_order_and_names(self, victorian_terrace, minimal_building):
        """Test results come back in input order."""
        items = BatchRunner(max_workers=1).run_batch([minimal_building, victorian_terrace])

        assert [i.index for i in items] == [0, 1]
        assert [i.name for i in items] == ["Minimal", "Victorian terrace"]

    def test_results_match_engine(self, engine, victorian_terrace):
        """Test batch results equal direct engine runs."""
        items = BatchRunner(max_workers=1).run_batch([victorian_terrace])

        assert items[0].result == engine.run(victorian_terrace)

    def test_dict_input(self, minimal_building_dict):
        """Test plain dicts are accepted."""
        items = BatchRunner(max_workers=1).run_batch([minimal_building_dict])

        assert items[0].success
        assert items[0].name == "Minimal"

    def test_empty(self):
        """Test an empty batch returns an empty list."""
        assert BatchRunner(max_workers=1).run_batch([]) == []


class TestParallel:
    """Process pool batches."""

    def test_two_workers(self, engine, victorian_terrace, minimal_building):
        """Test a pooled run matches the engine, in order."""
        descriptions = [victorian_terrace, minimal_building, victorian_terrace.with_u_values({"walls": 0.3})]

        items = BatchRunner(max_workers=2).run_batch(descriptions)

        assert all(i.success for i in items)
        assert [i.result for i in items] == [engine.run(d) for d in descriptions]

    @pytest.mark.parametrize("error", [BrokenProcessPool("pool died"), OSError("no fork")])
    def test_pool_failure_falls_back(self, victorian_terrace, minimal_building, error):
        """Test a broken pool reruns the batch sequentially."""
        with patch("sapengine.simulation.runner.ProcessPoolExecutor", side_effect=error):
            items = BatchRunner(max_workers=2).run_batch([victorian_terrace, minimal_building])

        assert [i.success for i in items] == [True, True]
