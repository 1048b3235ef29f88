import argparse
import os
from typing import List, Optional, Sequence, Type

from .checks.base import BaseCheck
from .cloudwatch.thresholds import ThresholdConfig
from .core.constants import DEFAULT_REGION
from .core.exceptions import ConfigurationError, UsageError


class CheckArgumentParser(argparse.ArgumentParser):
    """
    ArgumentParser that raises instead of exiting with status 2, which a
    monitoring scheduler would read as CRITICAL.
    """

    def error(self, message: str) -> None:
        raise UsageError(f"{self.prog}: {message}")


class CliParser:
    @staticmethod
    def build_parser(check: Type[BaseCheck]) -> CheckArgumentParser:
        parser = CheckArgumentParser(
            prog=f"check-{check.name}", description=check.description
        )
        CliParser.add_common_arguments(parser)
        check.add_arguments(parser)
        return parser

    @staticmethod
    def add_common_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--region",
            "--aws-region",
            "-r",
            dest="region",
            type=str,
            default=os.environ.get("AWS_DEFAULT_REGION", DEFAULT_REGION),
            help="AWS region (default: %(default)s).",
        )
        parser.add_argument(
            "--profile",
            type=str,
            help="AWS profile name. Credentials are otherwise read from the environment.",
        )
        parser.add_argument(
            "--access-key-id",
            "-k",
            type=str,
            help="AWS access key ID.",
        )
        parser.add_argument(
            "--secret-access-key",
            "-s",
            type=str,
            help="AWS secret access key.",
        )
        parser.add_argument(
            "--role-arn",
            type=str,
            help="IAM role to assume before querying AWS.",
        )
        parser.add_argument(
            "--config",
            type=str,
            help="YAML file with default flag values per check.",
        )
        parser.add_argument(
            "--verbose",
            "-v",
            action="store_true",
            help="Log progress to stderr.",
        )
        parser.add_argument(
            "--debug",
            action="store_true",
            help="Log debug output, AWS SDK included, to stderr.",
        )

    @staticmethod
    def config_path(argv: Optional[Sequence[str]]) -> Optional[str]:
        pre_parser = argparse.ArgumentParser(add_help=False)
        pre_parser.add_argument("--config")
        known, _ = pre_parser.parse_known_args(argv)
        return known.config

    @staticmethod
    def apply_config_defaults(
        parser: argparse.ArgumentParser, check_name: str, config_path: str
    ) -> None:
        """Use the config file's values as defaults so explicit flags still win."""
        defaults = ThresholdConfig(config_path).get_check_defaults(check_name)
        known_dests = {action.dest for action in parser._actions}
        unknown = sorted(set(defaults) - known_dests)
        if unknown:
            raise ConfigurationError(
                f"Unknown option(s) for check '{check_name}' in {config_path}: {', '.join(unknown)}"
            )
        for action in parser._actions:
            if action.dest in defaults:
                action.required = False
        parser.set_defaults(**defaults)

    @staticmethod
    def parse_arguments(
        check: Type[BaseCheck], argv: Optional[List[str]] = None
    ) -> argparse.Namespace:
        parser = CliParser.build_parser(check)
        config_path = CliParser.config_path(argv)
        if config_path:
            CliParser.apply_config_defaults(parser, check.name, config_path)
        return parser.parse_args(argv)
