from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class Resource:
    type: str  # DynamoDB, ELB, RDS, etc.
    name: str  # Table name, load balancer name, DB instance identifier
    id: str = ""  # ARN or AWS id where the API exposes one
    attributes: Dict[str, Any] = field(default_factory=dict)
