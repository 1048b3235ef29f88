import logging
import yaml
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Union
from pathlib import Path
from botocore.exceptions import BotoCoreError, ClientError

from ..core.constants import METRIC_SETTINGS, STATISTICS
from ..core.exceptions import ConfigurationError
from ..core.session import AWSSession
from ..utils import load_yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricSettings:
    check_name: str
    key: str
    metric_name: str
    namespace: str
    dimension_name: str
    unit: str
    statistic: str
    comparison_operator: str
    no_data_value: float
    lookback_periods: int


@dataclass(frozen=True)
class MetricQuery:
    namespace: str
    metric_name: str
    dimension_name: str
    dimension_value: str
    statistic: str
    period: int
    end_time: datetime
    unit: Optional[str] = None
    lookback_periods: int = 1

    @classmethod
    def from_settings(
        cls,
        settings: MetricSettings,
        dimension_value: str,
        statistic: str,
        period: int,
        end_time: datetime,
    ) -> "MetricQuery":
        return cls(
            namespace=settings.namespace,
            metric_name=settings.metric_name,
            dimension_name=settings.dimension_name,
            dimension_value=dimension_value,
            statistic=normalize_statistic(statistic),
            period=period,
            end_time=end_time,
            unit=settings.unit,
            lookback_periods=settings.lookback_periods,
        )

    @property
    def start_time(self) -> datetime:
        return self.end_time - timedelta(seconds=self.period * self.lookback_periods)


def normalize_statistic(statistic: str) -> str:
    """Map a statistic given in any case to the name CloudWatch expects."""
    try:
        return STATISTICS[statistic.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown statistic '{statistic}'. Must be one of {', '.join(STATISTICS)}."
        )


def is_no_data(value: float, sentinel: float) -> bool:
    return value == sentinel


class MetricConfig:
    _metric_configs: Dict[str, Dict[str, MetricSettings]] = {}

    def __init__(self, file_path: Union[str, Path] = METRIC_SETTINGS):
        if not MetricConfig._metric_configs:
            self._load_metric_configs(file_path)

    @classmethod
    def _load_metric_configs(cls, file_path: Union[str, Path]) -> None:
        if cls._metric_configs:
            logger.debug("Metric Configs already loaded.")
            return

        try:
            data = load_yaml(file_path)
            cls._metric_configs = {
                check_name: {
                    key: MetricSettings(
                        check_name=check_name,
                        key=key,
                        metric_name=settings["metric_name"],
                        namespace=settings["namespace"],
                        dimension_name=settings["dimension_name"],
                        unit=settings["unit"],
                        statistic=settings["statistic"],
                        comparison_operator=settings["comparison_operator"],
                        no_data_value=float(settings["no_data_value"]),
                        lookback_periods=int(settings["lookback_periods"]),
                    )
                    for key, settings in metrics.items()
                }
                for check_name, metrics in data.items()
            }
            logger.debug(f"{len(cls._metric_configs)} metric configurations loaded.")
        except (FileNotFoundError, yaml.YAMLError, KeyError, TypeError) as e:
            logger.error(f"Error loading metrics: {e}")
            raise ConfigurationError(f"Error loading metric settings from {file_path}: {e}")

    @classmethod
    def get_check_metrics(cls, check_name: str) -> Dict[str, MetricSettings]:
        return cls._metric_configs.get(check_name, {})

    @classmethod
    def get_metric_settings(cls, check_name: str, key: str) -> MetricSettings:
        """Get the MetricSettings for a specific check and metric key."""
        metric_settings = cls._metric_configs.get(check_name, {}).get(key)
        if metric_settings is None:
            raise ConfigurationError(
                f"Metric '{key}' not configured for check '{check_name}'."
            )
        return metric_settings

    @classmethod
    def default_statistic(cls, check_name: str) -> str:
        metrics = list(cls.get_check_metrics(check_name).values())
        return metrics[0].statistic if metrics else "average"


class CloudWatchMetrics:
    """Reads metric statistics through the session's CloudWatch client."""

    def __init__(self, session: AWSSession):
        self.session = session

    @property
    def client(self) -> Any:
        return self.session.client("cloudwatch")

    def get_latest_value(self, query: MetricQuery, default: float) -> float:
        """
        Return the newest datapoint's statistic for the query.

        Errors and empty results are logged and replaced by ``default`` so a
        missing metric never aborts the check.
        """
        request: Dict[str, Any] = {
            "Namespace": query.namespace,
            "MetricName": query.metric_name,
            "Dimensions": [
                {"Name": query.dimension_name, "Value": query.dimension_value}
            ],
            "StartTime": query.start_time,
            "EndTime": query.end_time,
            "Period": query.period,
            "Statistics": [query.statistic],
        }
        if query.unit:
            request["Unit"] = query.unit

        try:
            response = self.client.get_metric_statistics(**request)
        except (BotoCoreError, ClientError) as e:
            logger.warning(
                f"Failed to fetch {query.namespace}/{query.metric_name} "
                f"for {query.dimension_value}: {e}"
            )
            return default

        datapoints = response.get("Datapoints", [])
        if not datapoints:
            logger.info(
                f"No datapoints for {query.metric_name} on {query.dimension_value}"
            )
            return default

        latest = max(datapoints, key=lambda datapoint: datapoint["Timestamp"])
        value = latest.get(query.statistic)
        if value is None:
            return default
        logger.debug(f"{query.metric_name} on {query.dimension_value}: {value}")
        return float(value)
