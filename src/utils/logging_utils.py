"""
Experiment logger for super fair division benchmark runs
"""
import logging
from datetime import datetime
from typing import Dict, Any


class ExperimentLogger:
    """
    Logger that brackets a benchmark with start/end records
    """

    def __init__(self, name: str = "super_fair_division"):
        """
        Initialize the experiment logger

        Args:
            name: Logger name
        """
        self.logger = logging.getLogger(name)

        # Only attach a handler when nothing upstream will print our records
        if not self.logger.handlers and not logging.getLogger().handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

        self.start_time = None

    def log_experiment_start(self, config: Dict[str, Any]) -> None:
        """
        Log the start of a benchmark

        Args:
            config: Benchmark configuration
        """
        self.start_time = datetime.now()
        self.logger.info("=" * 80)
        self.logger.info("BENCHMARK START")
        self.logger.info(f"Time: {self.start_time.isoformat()}")
        self.logger.info(f"Config: {config}")
        self.logger.info("=" * 80)

    def log_experiment_end(self, results_summary: Dict[str, Any]) -> None:
        """
        Log the end of a benchmark

        Args:
            results_summary: Summary of results
        """
        end_time = datetime.now()
        duration = end_time - self.start_time if self.start_time else None

        self.logger.info("BENCHMARK END")
        self.logger.info(f"Duration: {duration}")
        self.logger.info(f"Results: {results_summary}")
        self.logger.info("=" * 80)

    def log_milestone(self, message: str) -> None:
        """Log a significant milestone"""
        self.logger.info(f"checkpoint: {message}")
