# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""General utility functions for the Atlas Service Broker."""

from ..constants import CLUSTER_NAME_MAX_LENGTH
from pydantic import BaseModel
from typing import Any, Dict


def normalize_cluster_name(instance_id: str) -> str:
    """Derive the Atlas cluster name for a service instance.

    Atlas accepts different name lengths depending on the environment it runs
    in. Truncating to 23 characters is safe everywhere and keeps the first four
    groups of a UUID, which is what platforms use for instance IDs.

    Args:
        instance_id: The instance ID assigned by the platform

    Returns:
        The cluster name to use with Atlas
    """
    return instance_id[:CLUSTER_NAME_MAX_LENGTH]


def format_broker_response(response: BaseModel) -> Dict[str, Any]:
    """Format a broker response model for MCP.

    Args:
        response: Response returned by the broker

    Returns:
        JSON compatible dictionary without unset optional fields
    """
    return response.model_dump(mode='json', exclude_none=True)
