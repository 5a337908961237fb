"""Metrics logging utilities."""

from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional, Tuple
import csv
import os


class MetricsLogger:
    """
    Logger for training metrics.

    Every call writes one CSV row keyed by ``step``; columns are added as new
    metric names appear, carrying forward the last value of other columns.
    """

    def __init__(self, log_dir: str = "data/logs", filename: Optional[str] = None):
        """
        Initialize metrics logger.

        Args:
            log_dir: Directory to save logs
            filename: CSV file name (timestamped by default)
        """
        self.log_dir = log_dir
        os.makedirs(log_dir, exist_ok=True)

        self.metrics: Dict[str, List[Tuple[int, float]]] = defaultdict(list)
        self.current_episode = 0

        if filename is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"metrics_{timestamp}.csv"
        self.csv_path = os.path.join(log_dir, filename)
        self.csv_fieldnames = ["step"]
        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.DictWriter(self.csv_file, fieldnames=self.csv_fieldnames)
        self.csv_writer.writeheader()

    def log(self, key: str, value: float, step: Optional[int] = None) -> None:
        """
        Log a metric value.

        Args:
            key: Metric name
            value: Metric value
            step: Step/episode number (uses current_episode if None)
        """
        self.log_dict({key: value}, step=step)

    def log_dict(self, metrics_dict: Dict[str, float], step: Optional[int] = None) -> None:
        """
        Log multiple metrics at once.

        Args:
            metrics_dict: Dictionary of metric names to values
            step: Step/episode number
        """
        if step is None:
            step = self.current_episode

        for key, value in metrics_dict.items():
            self.metrics[key].append((step, value))

        row: Dict[str, object] = {"step": step}
        for field in self.csv_fieldnames[1:]:
            values = self.metrics.get(field)
            row[field] = values[-1][1] if values else None
        row.update(metrics_dict)

        new_fields = [key for key in metrics_dict if key not in self.csv_fieldnames]
        if new_fields:
            self.csv_fieldnames.extend(new_fields)
            self._rewrite()
        self.csv_writer.writerow(row)
        self.csv_file.flush()

    def _rewrite(self) -> None:
        """Rewrite the whole file after the header gained columns."""
        self.csv_file.close()
        with open(self.csv_path, "r", newline="") as f:
            existing = list(csv.DictReader(f))

        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.DictWriter(self.csv_file, fieldnames=self.csv_fieldnames)
        self.csv_writer.writeheader()
        for old in existing:
            self.csv_writer.writerow({field: old.get(field) for field in self.csv_fieldnames})

    def increment_episode(self) -> None:
        """Increment current episode counter."""
        self.current_episode += 1

    def get_metric(self, key: str) -> List[Tuple[int, float]]:
        """
        Get all logged values for a metric.

        Args:
            key: Metric name

        Returns:
            List of (step, value) tuples
        """
        return self.metrics.get(key, [])

    def close(self) -> None:
        """Close the logger and CSV file."""
        if self.csv_file and not self.csv_file.closed:
            self.csv_file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
