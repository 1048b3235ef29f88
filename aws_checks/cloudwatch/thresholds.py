import logging
import operator
import yaml
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Union
from pathlib import Path

from ..core.exceptions import ConfigurationError
from ..core.severity import Severity
from ..utils import load_yaml

logger = logging.getLogger(__name__)

COMPARATORS: Dict[str, Callable[[float, float], bool]] = {
    "ge": operator.ge,
    "gt": operator.gt,
}


@dataclass(frozen=True)
class Thresholds:
    warning: Optional[float] = None
    critical: Optional[float] = None
    comparison_operator: str = "ge"

    def __post_init__(self) -> None:
        if self.comparison_operator not in COMPARATORS:
            raise ConfigurationError(
                f"Unknown comparison operator '{self.comparison_operator}'"
            )

    @property
    def configured(self) -> bool:
        return self.warning is not None or self.critical is not None

    def evaluate(self, value: float) -> Tuple[Severity, Optional[float]]:
        """Critical is tried before warning; the first crossed threshold wins."""
        compare = COMPARATORS[self.comparison_operator]
        for severity, threshold in (
            (Severity.CRITICAL, self.critical),
            (Severity.WARNING, self.warning),
        ):
            if threshold is None:
                continue
            if compare(value, threshold):
                return severity, threshold
        return Severity.OK, None


class ThresholdConfig:
    """Per-check flag defaults read from a user supplied YAML file."""

    def __init__(self, file_path: Optional[Union[str, Path]] = None):
        self._threshold_configs: Dict[str, Dict[str, Any]] = {}
        if file_path:
            self._load_threshold_configs(file_path)

    def _load_threshold_configs(self, file_path: Union[str, Path]) -> None:
        try:
            data = load_yaml(file_path)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            logger.error(f"Error loading thresholds: {e}")
            raise ConfigurationError(f"Error loading config {file_path}: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config {file_path} must be a mapping of checks")

        for check_name, options in data.items():
            if options is None:
                options = {}
            if not isinstance(options, dict):
                raise ConfigurationError(
                    f"Section '{check_name}' in {file_path} must be a mapping of options"
                )
            self._threshold_configs[check_name] = {
                str(option).replace("-", "_"): value for option, value in options.items()
            }
        logger.info(f"Loaded defaults for {len(self._threshold_configs)} checks.")

    def get_check_defaults(self, check_name: str) -> Dict[str, Any]:
        defaults = self._threshold_configs.get(check_name, {})
        if not defaults:
            logger.debug(f"No configured defaults for check '{check_name}'.")
        return defaults
