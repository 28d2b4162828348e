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

"""Tool to provision a new service instance."""

import asyncio
from ...common.context import BrokerContext
from ...common.decorator import handle_exceptions
from ...common.server import mcp
from ...common.utils import format_broker_response
from ...constants import SUCCESS_PROVISIONING
from loguru import logger
from pydantic import Field
from typing import Any, Dict, Optional
from typing_extensions import Annotated


PROVISION_TOOL_DESCRIPTION = """Provision a new service instance backed by a MongoDB Atlas cluster.

<use_case>
Use this tool to create the Atlas cluster for a new service instance. The service ID picks the
cloud provider and the plan ID picks the instance size; both must come from the catalog resource.
</use_case>

<important_notes>
1. Cluster creation takes several minutes and always completes asynchronously
2. The cluster name is derived from the instance ID (its first 23 characters)
3. Cluster settings can be passed as JSON in `parameters`, e.g. {"cluster": {"backupEnabled": true}}
4. The provider and instance size in `parameters` are always overridden by the service and plan
5. Poll LastOperation with the returned `operation` until it reports "succeeded" or "failed"
</important_notes>

## Response structure
Returns a dictionary with the following keys:
- `message`: Confirmation that provisioning has started
- `is_async`: Always true
- `operation`: The operation to pass to LastOperation ("provision")
- `dashboard_url`: Link to the cluster in the Atlas UI
"""


@mcp.tool(
    name='Provision',
    description=PROVISION_TOOL_DESCRIPTION,
)
@handle_exceptions
async def provision_instance(
    instance_id: Annotated[str, Field(description='The instance ID assigned by the platform')],
    service_id: Annotated[str, Field(description='The catalog service ID')],
    plan_id: Annotated[str, Field(description='The catalog plan ID')],
    parameters: Annotated[
        Optional[str], Field(description='Provisioning parameters as a JSON object')
    ] = None,
    accepts_incomplete: Annotated[
        bool, Field(description='Whether the caller accepts asynchronous completion')
    ] = True,
) -> Dict[str, Any]:
    """Provision a new service instance.

    Args:
        instance_id: The instance ID assigned by the platform
        service_id: The catalog service ID
        plan_id: The catalog plan ID
        parameters: Provisioning parameters as a JSON object
        accepts_incomplete: Whether the caller accepts asynchronous completion

    Returns:
        Dict[str, Any]: The provisioning response
    """
    broker = BrokerContext.broker()

    response = await asyncio.to_thread(
        broker.provision,
        instance_id,
        service_id,
        plan_id,
        parameters,
        accepts_incomplete,
    )
    logger.info(f'Provision of instance {instance_id} accepted')

    result = format_broker_response(response)
    result['message'] = SUCCESS_PROVISIONING.format(instance_id)
    return result
