# =============================================================================
# FILE: src/modules/runner.py
"""
Benchmark Runner - Times both allocators over growing participant counts

Features:
- YAML-driven case list (see configs/benchmark.yaml)
- Seeded valuation/weight generation
- Progress tracking with tqdm
- CSV and JSON output

Priority: MEDIUM | Status: Production-Ready
Version: 1.0.0
"""
import numpy as np
import pandas as pd
from typing import Dict, List, Optional, Any
from pathlib import Path
from dataclasses import dataclass, field
import logging
import time
from datetime import datetime
from tqdm import tqdm

from .allocation import allocate_equal, allocate_weighted
from .errors import FairDivisionError
from src.utils.arithmetic import WidthGuard
from src.utils.logging_utils import ExperimentLogger
from src.utils.metrics import summarize_timings

logger = logging.getLogger(__name__)

VALUE_DISTRIBUTIONS = ('sequential', 'uniform')


@dataclass
class BenchmarkCase:
    """One timed workload"""
    name: str
    n_participants: int
    weighted: bool = False
    distribution: str = 'sequential'

    def __post_init__(self):
        if self.n_participants < 1:
            raise ValueError(f"n_participants must be positive, got {self.n_participants}")
        if self.distribution not in VALUE_DISTRIBUTIONS:
            raise ValueError(
                f"Unknown distribution '{self.distribution}'. Choose from {VALUE_DISTRIBUTIONS}"
            )


def _default_cases() -> List[BenchmarkCase]:
    return [
        BenchmarkCase('small input', 5),
        BenchmarkCase('medium input', 99),
        BenchmarkCase('large input', 999),
    ]


@dataclass
class BenchmarkConfig:
    """Benchmark settings, usually loaded from YAML"""
    cases: List[BenchmarkCase] = field(default_factory=_default_cases)
    repeats: int = 100
    seed: Optional[int] = 42
    int_bits: Optional[int] = None
    max_value: int = 10_000
    max_weight: int = 10

    def __post_init__(self):
        if self.repeats < 1:
            raise ValueError(f"repeats must be positive, got {self.repeats}")
        if self.max_value < 1 or self.max_weight < 1:
            raise ValueError("max_value and max_weight must be positive")
        if not self.cases:
            raise ValueError("cases must not be empty")
        WidthGuard(self.int_bits)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'BenchmarkConfig':
        params = config.get('benchmark', config)
        kwargs = {
            key: params[key]
            for key in ('repeats', 'seed', 'int_bits', 'max_value', 'max_weight')
            if key in params
        }
        if 'cases' in params:
            kwargs['cases'] = [BenchmarkCase(**case) for case in params['cases']]
        return cls(**kwargs)


class BenchmarkRunner:
    """
    Runs each configured case ``repeats`` times and records timing statistics

    A case that raises is logged and recorded with its error kind; the
    remaining cases still run.
    """

    def __init__(self, output_dir: Optional[str] = None, seed: Optional[int] = None):
        self.output_dir = Path(output_dir) if output_dir is not None else None
        if self.output_dir is not None:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        self.rng = np.random.default_rng(seed)
        self.seed = seed
        self.results: List[Dict[str, Any]] = []

    def generate_inputs(self, case: BenchmarkCase, config: BenchmarkConfig):
        """Valuations (and weights for weighted cases) for one case"""
        if case.distribution == 'sequential':
            values = np.arange(1, case.n_participants + 1, dtype=np.int64)
        else:
            values = self.rng.integers(0, config.max_value, size=case.n_participants, endpoint=True)

        weights = None
        if case.weighted:
            weights = self.rng.integers(1, config.max_weight, size=case.n_participants, endpoint=True)
        return values, weights

    def run_case(self, case: BenchmarkCase, config: BenchmarkConfig) -> Dict[str, Any]:
        values, weights = self.generate_inputs(case, config)
        row = {
            'case': case.name,
            'n_participants': case.n_participants,
            'weighted': case.weighted,
            'distribution': case.distribution,
            'repeats': config.repeats,
            'int_bits': config.int_bits,
        }

        timings = np.empty(config.repeats)
        allocations = None
        for r in range(config.repeats):
            start = time.perf_counter()
            if weights is None:
                allocations = allocate_equal(values, config.int_bits)
            else:
                allocations = allocate_weighted(values, weights, config.int_bits)
            timings[r] = time.perf_counter() - start

        row.update(summarize_timings(timings))
        row['zero_sum'] = sum(allocations) == 0
        row['error'] = None
        return row

    def run(self, config: BenchmarkConfig) -> pd.DataFrame:
        """
        Execute every case in ``config``

        Returns:
        --------
        DataFrame with one row per case
        """
        exp_logger = ExperimentLogger(name=__name__)
        exp_logger.log_experiment_start({
            'cases': [c.name for c in config.cases],
            'repeats': config.repeats,
            'seed': self.seed,
            'int_bits': config.int_bits,
        })

        self.results = []
        for case in tqdm(config.cases, desc="Benchmark Progress"):
            try:
                row = self.run_case(case, config)
            except FairDivisionError as e:
                logger.error(f"Case '{case.name}' failed: {e}", exc_info=True)
                row = {
                    'case': case.name,
                    'n_participants': case.n_participants,
                    'weighted': case.weighted,
                    'distribution': case.distribution,
                    'repeats': config.repeats,
                    'int_bits': config.int_bits,
                    'zero_sum': None,
                    'error': e.kind.name,
                }
            row['timestamp'] = datetime.now().isoformat()
            self.results.append(row)
            exp_logger.log_milestone(f"{case.name} done")

        df_results = pd.DataFrame(self.results)
        if self.output_dir is not None:
            self._save_results(df_results)

        exp_logger.log_experiment_end({
            'cases_run': len(df_results),
            'failures': int(df_results['error'].notna().sum()),
        })
        return df_results

    def _save_results(self, df: pd.DataFrame):
        """Save results as CSV and JSON"""
        csv_path = self.output_dir / 'benchmark.csv'
        df.to_csv(csv_path, index=False)

        json_path = self.output_dir / 'benchmark.json'
        df.to_json(json_path, orient='records', indent=2)

        logger.info(f"Results saved to {self.output_dir}")
        logger.info(f"  - CSV: {csv_path}")
        logger.info(f"  - JSON: {json_path}")
