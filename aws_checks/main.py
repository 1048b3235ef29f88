import logging
import sys
from typing import Callable, List, Optional, Type

from .checks import CHECKS
from .checks.base import BaseCheck
from .cli_parser import CliParser
from .core.exceptions import AWSChecksError
from .core.session import create_session
from .core.severity import CheckResult, Severity
from .logger import LoggerSetup, level_from_flags

logger = logging.getLogger(__name__)


def run_check(check: Type[BaseCheck], argv: Optional[List[str]] = None) -> CheckResult:
    """
    Parse flags, open the AWS session and run one check.

    Any failure becomes an UNKNOWN result carrying the error message.
    """
    try:
        args = CliParser.parse_arguments(check, argv)
    except AWSChecksError as e:
        return CheckResult(check.title, Severity.UNKNOWN, str(e))

    LoggerSetup(level=level_from_flags(args.verbose, args.debug))
    logger.info(f"Starting check {check.name} in {args.region}")

    try:
        session = create_session(
            region=args.region,
            profile=args.profile,
            access_key_id=args.access_key_id,
            secret_access_key=args.secret_access_key,
            role_arn=args.role_arn,
        )
        return check(args, session).run()
    except Exception as e:
        logger.debug(f"Check {check.name} failed", exc_info=True)
        return CheckResult(check.title, Severity.UNKNOWN, f"Check failed to run: {e}")


def report(result: CheckResult) -> None:
    print(result.render())
    sys.exit(result.exit_code)


def main(argv: Optional[List[str]] = None) -> None:
    """Umbrella entry point: ``aws-checks <check> [flags]``."""
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] not in CHECKS:
        choices = ", ".join(sorted(CHECKS))
        given = argv[0] if argv else "none"
        message = f"unknown check '{given}', expected one of: {choices}"
        report(CheckResult("AWSChecks", Severity.UNKNOWN, message))
    report(run_check(CHECKS[argv[0]], argv[1:]))


def _entry_point(check_name: str) -> Callable[[], None]:
    def entry() -> None:
        report(run_check(CHECKS[check_name], sys.argv[1:]))

    entry.__name__ = f"check_{check_name.replace('-', '_')}"
    return entry


# Console scripts, one per check
check_dynamodb_capacity = _entry_point("dynamodb-capacity")
check_dynamodb_throttle = _entry_point("dynamodb-throttle")
check_ec2_network = _entry_point("ec2-network")
check_elb_health = _entry_point("elb-health")
check_elb_latency = _entry_point("elb-latency")
check_elb_sum_requests = _entry_point("elb-sum-requests")
check_rds = _entry_point("rds")
check_rds_events = _entry_point("rds-events")
check_redshift_events = _entry_point("redshift-events")
check_vpc_vpn = _entry_point("vpc-vpn")


if __name__ == "__main__":
    main()
