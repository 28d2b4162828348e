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

"""Tool to deprovision a service instance."""

import asyncio
from ...common.context import BrokerContext
from ...common.decorator import handle_exceptions
from ...common.server import mcp
from ...common.utils import format_broker_response
from ...constants import SUCCESS_DEPROVISIONING
from pydantic import Field
from typing import Any, Dict
from typing_extensions import Annotated


DEPROVISION_TOOL_DESCRIPTION = """Deprovision a service instance and terminate its Atlas cluster.

<warning>
This permanently deletes the cluster and all data in it. Existing bindings stop working.
</warning>

<important_notes>
1. Cluster termination always completes asynchronously
2. Poll LastOperation with the returned `operation` until it reports "succeeded"
3. An instance whose cluster no longer exists is reported as gone (status 410)
</important_notes>

## Response structure
Returns a dictionary with the following keys:
- `message`: Confirmation that deprovisioning has started
- `is_async`: Always true
- `operation`: The operation to pass to LastOperation ("deprovision")
"""


@mcp.tool(
    name='Deprovision',
    description=DEPROVISION_TOOL_DESCRIPTION,
)
@handle_exceptions
async def deprovision_instance(
    instance_id: Annotated[str, Field(description='The instance ID assigned by the platform')],
    accepts_incomplete: Annotated[
        bool, Field(description='Whether the caller accepts asynchronous completion')
    ] = True,
) -> Dict[str, Any]:
    """Deprovision a service instance.

    Args:
        instance_id: The instance ID assigned by the platform
        accepts_incomplete: Whether the caller accepts asynchronous completion

    Returns:
        Dict[str, Any]: The deprovisioning response
    """
    broker = BrokerContext.broker()

    response = await asyncio.to_thread(broker.deprovision, instance_id, accepts_incomplete)

    result = format_broker_response(response)
    result['message'] = SUCCESS_DEPROVISIONING.format(instance_id)
    return result
