import boto3
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from botocore.exceptions import BotoCoreError, ClientError

from .constants import DEFAULT_REGION, DEFAULT_SESSION
from .exceptions import SessionError

logger = logging.getLogger(__name__)


@dataclass
class AWSSession:
    session: boto3.Session
    region_name: str = DEFAULT_REGION
    _clients: Dict[str, Any] = field(default_factory=dict, repr=False)

    def client(self, service_name: str) -> Any:
        """Return the client for a service, creating it on first use."""
        if service_name not in self._clients:
            logger.debug(f"Creating {service_name} client in {self.region_name}")
            self._clients[service_name] = self.session.client(
                service_name, region_name=self.region_name
            )
        return self._clients[service_name]


def assume_role(
    role_arn: str,
    region: str = DEFAULT_REGION,
    role_session_name: str = DEFAULT_SESSION,
    base_session: Optional[boto3.Session] = None,
) -> boto3.Session:
    """Assumes a role through STS and returns a boto3 Session using its credentials."""
    try:
        sts_client = (base_session or boto3.Session()).client("sts")
        credentials = sts_client.assume_role(
            RoleArn=role_arn, RoleSessionName=role_session_name
        )["Credentials"]

        return boto3.Session(
            aws_access_key_id=credentials["AccessKeyId"],
            aws_secret_access_key=credentials["SecretAccessKey"],
            aws_session_token=credentials["SessionToken"],
            region_name=region,
        )
    except (BotoCoreError, ClientError) as e:
        logger.error(f"Failed to assume role {role_arn}: {e}")
        raise SessionError(f"Failed to assume role {role_arn}: {e}") from e


def create_session(
    region: str = DEFAULT_REGION,
    profile: Optional[str] = None,
    access_key_id: Optional[str] = None,
    secret_access_key: Optional[str] = None,
    role_arn: Optional[str] = None,
) -> AWSSession:
    """
    Build the session a check runs with.

    Without explicit keys or a profile boto3 resolves credentials itself,
    starting with AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY.
    """
    if bool(access_key_id) != bool(secret_access_key):
        raise SessionError(
            "--access-key-id and --secret-access-key must be given together"
        )

    session_args: Dict[str, Any] = {"region_name": region}
    if access_key_id:
        session_args["aws_access_key_id"] = access_key_id
        session_args["aws_secret_access_key"] = secret_access_key
    elif profile:
        session_args["profile_name"] = profile

    try:
        session = boto3.Session(**session_args)
    except BotoCoreError as e:
        raise SessionError(f"Failed to create AWS session: {e}") from e

    if role_arn:
        session = assume_role(role_arn, region, base_session=session)

    logger.info(f"AWS session ready for region {region}")
    return AWSSession(session=session, region_name=region)
