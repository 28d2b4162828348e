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

"""Tool to update an existing service instance."""

import asyncio
from ...common.context import BrokerContext
from ...common.decorator import handle_exceptions
from ...common.server import mcp
from ...common.utils import format_broker_response
from ...constants import SUCCESS_UPDATING
from pydantic import Field
from typing import Any, Dict, Optional
from typing_extensions import Annotated


UPDATE_TOOL_DESCRIPTION = """Update the Atlas cluster of an existing service instance.

<use_case>
Use this tool to change the plan (instance size) of a service instance or to change cluster
settings such as backups or the disk size.
</use_case>

<important_notes>
1. Changing the plan resizes the cluster; without a plan ID the instance size is kept
2. Cluster settings can be passed as JSON in `parameters`, e.g. {"cluster": {"backupEnabled": true}}
3. Cluster updates always complete asynchronously
4. Poll LastOperation with the returned `operation` until it reports "succeeded" or "failed"
</important_notes>

## Response structure
Returns a dictionary with the following keys:
- `message`: Confirmation that the update has started
- `is_async`: Always true
- `operation`: The operation to pass to LastOperation ("update")
- `dashboard_url`: Link to the cluster in the Atlas UI
"""


@mcp.tool(
    name='UpdateInstance',
    description=UPDATE_TOOL_DESCRIPTION,
)
@handle_exceptions
async def update_instance(
    instance_id: Annotated[str, Field(description='The instance ID assigned by the platform')],
    service_id: Annotated[str, Field(description='The catalog service ID')],
    plan_id: Annotated[
        Optional[str], Field(description='The new catalog plan ID, if the plan changes')
    ] = None,
    parameters: Annotated[
        Optional[str], Field(description='Update parameters as a JSON object')
    ] = None,
    accepts_incomplete: Annotated[
        bool, Field(description='Whether the caller accepts asynchronous completion')
    ] = True,
) -> Dict[str, Any]:
    """Update an existing service instance.

    Args:
        instance_id: The instance ID assigned by the platform
        service_id: The catalog service ID
        plan_id: The new catalog plan ID, if the plan changes
        parameters: Update parameters as a JSON object
        accepts_incomplete: Whether the caller accepts asynchronous completion

    Returns:
        Dict[str, Any]: The update response
    """
    broker = BrokerContext.broker()

    response = await asyncio.to_thread(
        broker.update,
        instance_id,
        service_id,
        plan_id,
        parameters,
        accepts_incomplete,
    )

    result = format_broker_response(response)
    result['message'] = SUCCESS_UPDATING.format(instance_id)
    return result
