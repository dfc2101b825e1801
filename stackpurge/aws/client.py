"""boto3 client construction."""

from __future__ import annotations

from typing import Any, Optional

import boto3
from botocore.config import Config as BotoConfig

# adaptive retries absorb API throttling during large purges
_BOTO_CONFIG = BotoConfig(retries={"max_attempts": 10, "mode": "adaptive"})


def create_boto_client(
    service_name: str,
    region_name: Optional[str] = None,
    profile_name: Optional[str] = None,
) -> Any:
    """Create a boto3 client for a service.

    Args:
        service_name: AWS service (e.g. "cloudformation")
        region_name: AWS region (default: from the session)
        profile_name: AWS profile name (optional)

    Returns:
        boto3 client
    """
    session = boto3.Session(profile_name=profile_name, region_name=region_name)
    return session.client(service_name, config=_BOTO_CONFIG)
