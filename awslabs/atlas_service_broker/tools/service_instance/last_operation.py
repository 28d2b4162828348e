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

"""Tool to poll the last operation of a service instance."""

import asyncio
from ...common.context import BrokerContext
from ...common.decorator import handle_exceptions
from ...common.server import mcp
from ...common.utils import format_broker_response
from pydantic import Field
from typing import Any, Dict
from typing_extensions import Annotated


LAST_OPERATION_TOOL_DESCRIPTION = """Report the progress of a provision, update or deprovision.

<use_case>
Use this tool after Provision, UpdateInstance or Deprovision to find out whether the
operation has finished. Call it repeatedly, e.g. every 30 seconds, until it reports
"succeeded" or "failed".
</use_case>

<important_notes>
1. Pass the `operation` value returned by the call that started the operation
2. The answer is always derived from the cluster's current state in Atlas; polling is safe to repeat
3. A deprovision succeeds once Atlas no longer knows the cluster
</important_notes>

## Response structure
Returns a dictionary with the following keys:
- `state`: One of "in progress", "succeeded" or "failed"
- `description`: What Atlas reports about the cluster
"""


@mcp.tool(
    name='LastOperation',
    description=LAST_OPERATION_TOOL_DESCRIPTION,
)
@handle_exceptions
async def get_last_operation(
    instance_id: Annotated[str, Field(description='The instance ID assigned by the platform')],
    operation: Annotated[
        str, Field(description='The operation being polled: provision, update or deprovision')
    ],
) -> Dict[str, Any]:
    """Report the progress of an operation on a service instance.

    Args:
        instance_id: The instance ID assigned by the platform
        operation: The operation being polled

    Returns:
        Dict[str, Any]: The state of the operation
    """
    broker = BrokerContext.broker()

    response = await asyncio.to_thread(broker.last_operation, instance_id, operation)
    return format_broker_response(response)
