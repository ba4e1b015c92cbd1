# =============================================================================
# FILE: tests/test_integration.py
"""
End-to-End Integration Tests - benchmark runner and CLI

Priority: HIGH | Status: Production-Ready
Version: 1.0.0
"""
import pytest
import pandas as pd
import yaml

from src.main import main
from src.modules.runner import BenchmarkCase, BenchmarkConfig, BenchmarkRunner
from src.utils.metrics import compute_confidence_interval, summarize_timings


class TestBenchmarkConfig:

    def test_defaults_mirror_original_sizes(self):
        config = BenchmarkConfig()
        assert [c.n_participants for c in config.cases] == [5, 99, 999]
        assert config.int_bits is None

    def test_from_nested_dict(self):
        config = BenchmarkConfig.from_dict({
            'benchmark': {
                'repeats': 3,
                'seed': 7,
                'int_bits': 128,
                'cases': [{'name': 'tiny', 'n_participants': 2, 'weighted': True}],
            }
        })
        assert config.repeats == 3
        assert config.int_bits == 128
        assert config.cases[0].weighted

    def test_invalid_distribution(self):
        with pytest.raises(ValueError):
            BenchmarkCase('bad', 5, distribution='normal')

    def test_empty_cases(self):
        with pytest.raises(ValueError):
            BenchmarkConfig(cases=[])
        with pytest.raises(ValueError):
            BenchmarkConfig.from_dict({'benchmark': {'cases': []}})

    def test_invalid_int_bits(self):
        with pytest.raises(ValueError):
            BenchmarkConfig(int_bits=1)

    def test_invalid_repeats(self):
        with pytest.raises(ValueError):
            BenchmarkConfig(repeats=0)


class TestBenchmarkRunner:

    @pytest.fixture
    def small_config(self):
        return BenchmarkConfig(
            cases=[
                BenchmarkCase('equal', 10),
                BenchmarkCase('weighted', 10, weighted=True, distribution='uniform'),
            ],
            repeats=3,
            seed=42,
        )

    def test_run_writes_results(self, tmp_path, small_config):
        runner = BenchmarkRunner(output_dir=str(tmp_path), seed=42)
        df = runner.run(small_config)

        assert len(df) == 2
        assert df['zero_sum'].all()
        assert df['error'].isna().all()
        assert (df['mean_s'] >= 0).all()
        assert (tmp_path / 'benchmark.csv').exists()
        assert (tmp_path / 'benchmark.json').exists()

        saved = pd.read_csv(tmp_path / 'benchmark.csv')
        assert list(saved['case']) == ['equal', 'weighted']

    def test_failed_case_is_recorded(self):
        config = BenchmarkConfig(
            cases=[BenchmarkCase('too wide', 999), BenchmarkCase('fits', 5)],
            repeats=2,
            int_bits=8,
        )
        df = BenchmarkRunner(seed=0).run(config)

        assert df.loc[0, 'error'] == 'CALCULATION_FAILED'
        assert pd.isna(df.loc[1, 'error'])

    def test_generate_inputs_is_seeded(self, small_config):
        case = small_config.cases[1]
        values_a, weights_a = BenchmarkRunner(seed=1).generate_inputs(case, small_config)
        values_b, weights_b = BenchmarkRunner(seed=1).generate_inputs(case, small_config)
        assert list(values_a) == list(values_b)
        assert list(weights_a) == list(weights_b)
        assert weights_a.min() >= 1


class TestTimingMetrics:

    def test_confidence_interval_brackets_mean(self):
        low, high = compute_confidence_interval([1.0, 2.0, 3.0, 4.0])
        assert low < 2.5 < high

    def test_single_sample(self):
        assert compute_confidence_interval([0.5]) == (0.5, 0.5)

    def test_summary_keys(self):
        summary = summarize_timings([0.1, 0.2, 0.3])
        assert summary['min_s'] == pytest.approx(0.1)
        assert summary['max_s'] == pytest.approx(0.3)
        assert summary['ci_low_s'] <= summary['mean_s'] <= summary['ci_high_s']


class TestCli:

    def test_equal(self, capsys):
        assert main(['equal', '10', '50']) == 0
        out = capsys.readouterr().out
        assert "[15, -15]" in out
        assert "Highest bidder (index 1): 50" in out

    def test_weighted(self, capsys):
        assert main(['weighted', '--values', '30', '60', '--weights', '1', '2']) == 0
        out = capsys.readouterr().out
        assert "[13, -13]" in out
        assert "Weight: 2, Allocation: -13" in out

    def test_weighted_negative_weight(self, capsys):
        code = main(['weighted', '--values', '10', '20', '30', '--weights', '1', '-2', '3'])
        assert code == 1
        assert "INVALID_INPUT" in capsys.readouterr().err

    def test_single_participant(self, capsys):
        assert main(['equal', '100']) == 1
        assert "NOT_ENOUGH_PARTICIPANTS" in capsys.readouterr().err

    def test_demo(self, capsys):
        assert main(['demo']) == 0
        out = capsys.readouterr().out
        assert "[60, 80, 100, 120, -360]" in out
        assert "[14, 42, 84, 136, -276]" in out
        assert "CALCULATION_FAILED" in out

    def test_benchmark(self, tmp_path, capsys):
        config_path = tmp_path / 'bench.yaml'
        config_path.write_text(yaml.safe_dump({
            'benchmark': {
                'repeats': 2,
                'cases': [{'name': 'tiny', 'n_participants': 3}],
            }
        }))
        code = main(['benchmark', '--config', str(config_path), '--output', str(tmp_path / 'out')])
        assert code == 0
        assert (tmp_path / 'out' / 'benchmark.csv').exists()
        assert "tiny" in capsys.readouterr().out

    def test_invalid_int_bits_exits_cleanly(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(['--int-bits', '1', 'equal', '10', '50'])
        assert exc_info.value.code == 2
        assert "int_bits must be >= 2" in capsys.readouterr().err

    def test_empty_benchmark_config_exits_cleanly(self, tmp_path, capsys):
        config_path = tmp_path / 'bench.yaml'
        config_path.write_text(yaml.safe_dump({'benchmark': {'cases': []}}))
        with pytest.raises(SystemExit):
            main(['benchmark', '--config', str(config_path), '--output', str(tmp_path / 'out')])
        assert "cases must not be empty" in capsys.readouterr().err

    def test_no_command(self):
        assert main([]) == 1
