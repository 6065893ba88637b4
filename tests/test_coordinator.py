"""
Tests for the four-worker Coordinator
"""

import pytest
from interval_bnb import (
    Box,
    BranchAndBound,
    Candidate,
    ConfigurationError,
    Coordinator,
    CoordinatorConfig,
    Interval,
    QUADRANT_COUNT,
    SearchConfig,
    TopologyError,
    UnknownObjectiveError,
    WORKER_COUNT,
    WorkerError,
    check_topology,
    combine,
    get_objective,
    plan_run,
    run_worker,
    split_box,
)
from interval_bnb.parallel.coordinator import WorkerResult


def _sequential(name: str, threshold: float):
    objective = get_objective(name)
    return BranchAndBound(objective, SearchConfig(threshold=threshold)).search(objective.domain)


def _worker_result(rank: int, bound: float, flos) -> WorkerResult:
    x0 = float(rank)
    candidates = [
        Candidate(Box(Interval(x0, x0 + 0.5), Interval(0.0, 0.5)), flo, bound)
        for flo in flos
    ]
    return WorkerResult(rank=rank, upper_bound=bound, candidates=candidates)


class TestTopology:
    """Fixed worker count."""

    def test_worker_count_constant(self):
        assert WORKER_COUNT == 4
        assert QUADRANT_COUNT == 4

    @pytest.mark.parametrize("size", [1, 2, 3, 5, 8])
    def test_wrong_size_rejected(self, size):
        with pytest.raises(TopologyError) as excinfo:
            check_topology(size)
        assert excinfo.value.size == size
        assert excinfo.value.expected == WORKER_COUNT

    def test_exact_size_accepted(self):
        check_topology(4)

    def test_config_rejects_worker_count(self):
        with pytest.raises(TopologyError):
            CoordinatorConfig(worker_count=2)

    def test_config_rejects_mode(self):
        with pytest.raises(ConfigurationError):
            CoordinatorConfig(mode="cluster")


class TestPlanRun:
    """Distribution of the first split."""

    def test_one_quadrant_per_rank(self):
        params = plan_run("sphere", 0.5)
        quadrants = split_box(get_objective("sphere").domain)
        assert [a.rank for a in params.assignment] == [0, 1, 2, 3]
        assert [a.box for a in params.assignment] == list(quadrants)
        assert params.threshold == 0.5
        assert params.objective_name == "sphere"

    def test_box_for(self):
        params = plan_run("double_well", 0.25)
        assert params.box_for(2) == Box(Interval(0.0, 2.0), Interval(-1.0, 0.0))
        with pytest.raises(ConfigurationError):
            params.box_for(4)

    def test_custom_domain(self):
        domain = Box.from_bounds([(0.0, 1.0), (0.0, 1.0)])
        params = plan_run("sphere", 0.1, domain)
        assert params.box_for(0) == Box(Interval(0.0, 0.5), Interval(0.0, 0.5))

    def test_unknown_objective(self):
        with pytest.raises(UnknownObjectiveError):
            plan_run("nope", 0.5)

    def test_bad_threshold(self):
        with pytest.raises(ConfigurationError):
            plan_run("sphere", 0.0)

    def test_parameters_are_immutable(self):
        params = plan_run("sphere", 0.5)
        with pytest.raises(Exception):
            params.threshold = 1.0

    def test_to_canonical(self):
        data = plan_run("sphere", 0.5).to_canonical()
        assert data["objective"] == "sphere"
        assert len(data["assignment"]) == 4


class TestRunWorker:
    """Rank-agnostic worker body."""

    def test_searches_only_its_quadrant(self):
        params = plan_run("sphere", 0.5)
        result = run_worker(params, 3)
        quadrant = params.box_for(3)
        assert result.rank == 3
        for c in result.candidates:
            assert quadrant.x.lo <= c.box.x.lo and c.box.x.hi <= quadrant.x.hi
            assert quadrant.y.lo <= c.box.y.lo and c.box.y.hi <= quadrant.y.hi

    def test_starts_from_fresh_state(self):
        params = plan_run("sphere", 0.5)
        first = run_worker(params, 0)
        second = run_worker(params, 0)
        assert first.upper_bound == second.upper_bound
        assert len(first.candidates) == len(second.candidates)


class TestCombine:
    """Min-reduction and candidate gathering."""

    def test_min_reduction(self):
        results = [
            _worker_result(0, 3.0, [1.0]),
            _worker_result(1, 2.0, [1.5]),
            _worker_result(2, 5.0, [0.5, 4.0]),
            _worker_result(3, float('inf'), []),
        ]
        combined = combine(results)
        assert combined.upper_bound == 2.0
        assert combined.local_bounds == {0: 3.0, 1: 2.0, 2: 5.0, 3: float('inf')}

    def test_merge_evicts_against_global_bound(self):
        results = [
            _worker_result(0, 3.0, [1.0, 2.5]),
            _worker_result(1, 2.0, [1.5]),
            _worker_result(2, 5.0, [0.5, 4.0]),
            _worker_result(3, 6.0, [2.0]),
        ]
        combined = combine(results, merge_candidates=True)
        assert combined.merged
        assert [c.flo for c in combined.candidates] == [0.5, 1.0, 1.5]
        assert all(c.flo < combined.upper_bound for c in combined.candidates)

    def test_no_merge_keeps_coordinator_candidates(self):
        results = [
            _worker_result(0, 3.0, [1.0, 2.5]),
            _worker_result(1, 2.0, [1.5]),
            _worker_result(2, 5.0, [0.5]),
            _worker_result(3, 6.0, []),
        ]
        combined = combine(results, merge_candidates=False)
        assert not combined.merged
        assert combined.upper_bound == 2.0
        assert [c.flo for c in combined.candidates] == [1.0]

    def test_result_order_does_not_matter(self):
        results = [_worker_result(r, 1.0 + r, [0.5]) for r in (3, 1, 0, 2)]
        assert combine(results).upper_bound == 1.0

    def test_wrong_number_of_results(self):
        results = [_worker_result(r, 1.0, []) for r in range(3)]
        with pytest.raises(TopologyError):
            combine(results)

    def test_duplicate_ranks(self):
        results = [_worker_result(r, 1.0, []) for r in (0, 1, 1, 3)]
        with pytest.raises(ConfigurationError):
            combine(results)


class TestCoordinator:
    """End-to-end four-worker runs."""

    def test_sphere_threads(self):
        result = Coordinator("sphere", 0.5, CoordinatorConfig(mode="thread")).run()
        assert 0.0 <= result.upper_bound <= 0.5 + 1e-12
        assert any(c.box.contains_point(0.0, 0.0) for c in result.candidates)
        assert all(c.flo < result.upper_bound for c in result.candidates)
        assert len(result.local_bounds) == 4

    def test_sphere_processes(self):
        result = Coordinator("sphere", 0.5, CoordinatorConfig(mode="process")).run()
        sequential = _sequential("sphere", 0.5)
        assert result.upper_bound <= sequential.upper_bound

    @pytest.mark.parametrize("name,threshold", [
        ("sphere", 0.5),
        ("sphere", 0.125),
        ("double_well", 0.25),
        ("booth", 1.0),
        ("six_hump_camel", 0.2),
        ("himmelblau", 0.5),
    ])
    def test_never_worse_than_sequential(self, name, threshold):
        distributed = Coordinator(name, threshold, CoordinatorConfig(mode="thread")).run()
        sequential = _sequential(name, threshold)
        assert distributed.upper_bound <= sequential.upper_bound

    def test_double_well_merge_finds_both_minima(self):
        result = Coordinator("double_well", 0.25, CoordinatorConfig(mode="thread")).run()
        assert any(c.box.x.contains(-1.0) for c in result.candidates)
        assert any(c.box.x.contains(1.0) for c in result.candidates)

    def test_double_well_without_merge(self):
        """Only rank 0's quadrant [-2,0] x [-1,0] is reported."""
        config = CoordinatorConfig(mode="thread", merge_candidates=False)
        result = Coordinator("double_well", 0.25, config).run()
        assert result.candidates
        for c in result.candidates:
            assert c.box.x.hi <= 0.0
            assert c.box.y.hi <= 0.0
        assert all(c.flo < result.upper_bound for c in result.candidates)

    def test_worker_results_kept(self):
        coordinator = Coordinator("sphere", 0.5, CoordinatorConfig(mode="thread"))
        result = coordinator.run()
        assert [r.rank for r in coordinator.worker_results] == [0, 1, 2, 3]
        assert result.nodes_explored == sum(r.nodes_explored for r in coordinator.worker_results)

    def test_worker_failure(self, monkeypatch):
        from interval_bnb.parallel import coordinator as module

        def broken(params, rank, log_frequency=0):
            if rank == 1:
                raise RuntimeError("boom")
            return run_worker(params, rank, log_frequency)

        monkeypatch.setattr(module, "run_worker", broken)
        with pytest.raises(WorkerError) as excinfo:
            Coordinator("sphere", 0.5, CoordinatorConfig(mode="thread")).run()
        assert excinfo.value.rank == 1

    def test_to_canonical(self):
        result = Coordinator("sphere", 0.5, CoordinatorConfig(mode="thread")).run()
        data = result.to_canonical()
        assert data["n_candidates"] == len(result.candidates)
        assert set(data["local_bounds"]) == {"0", "1", "2", "3"}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
