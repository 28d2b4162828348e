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

"""Tool to delete a service binding."""

import asyncio
from ...common.context import BrokerContext
from ...common.decorator import handle_exceptions
from ...common.server import mcp
from ...common.utils import format_broker_response
from ...constants import SUCCESS_UNBOUND
from pydantic import Field
from typing import Any, Dict
from typing_extensions import Annotated


UNBIND_TOOL_DESCRIPTION = """Delete a service binding and its database user.

<warning>
Applications using the binding's credentials lose access to the cluster immediately.
</warning>

<important_notes>
1. The instance must still exist, otherwise the call fails with status 410
2. A binding whose user is already gone fails with status 410
</important_notes>

## Response structure
Returns a dictionary with the following keys:
- `message`: Confirmation that the binding was deleted
- `is_async`: Always false
"""


@mcp.tool(
    name='Unbind',
    description=UNBIND_TOOL_DESCRIPTION,
)
@handle_exceptions
async def unbind_instance(
    instance_id: Annotated[str, Field(description='The instance ID assigned by the platform')],
    binding_id: Annotated[str, Field(description='The binding ID assigned by the platform')],
) -> Dict[str, Any]:
    """Delete a service binding.

    Args:
        instance_id: The instance ID assigned by the platform
        binding_id: The binding ID assigned by the platform

    Returns:
        Dict[str, Any]: The unbind response
    """
    broker = BrokerContext.broker()

    response = await asyncio.to_thread(broker.unbind, instance_id, binding_id)

    result = format_broker_response(response)
    result['message'] = SUCCESS_UNBOUND.format(binding_id)
    return result
