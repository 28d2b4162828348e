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

"""Tool to fetch an existing service binding."""

import asyncio
from ...common.context import BrokerContext
from ...common.decorator import handle_exceptions
from ...common.server import mcp
from pydantic import Field
from typing import Any, Dict
from typing_extensions import Annotated


GET_BINDING_TOOL_DESCRIPTION = """Fetch an existing service binding.

<important_notes>
1. Binding passwords are never stored, so bindings can't be retrieved after creation
2. This tool always reports a NotRetrievable error (status 404)
3. To get new credentials, Unbind and Bind again
</important_notes>
"""


@mcp.tool(
    name='GetBinding',
    description=GET_BINDING_TOOL_DESCRIPTION,
)
@handle_exceptions
async def get_instance_binding(
    instance_id: Annotated[str, Field(description='The instance ID assigned by the platform')],
    binding_id: Annotated[str, Field(description='The binding ID assigned by the platform')],
) -> Dict[str, Any]:
    """Fetch an existing service binding.

    Returns:
        Dict[str, Any]: Never returns normally; the error is reported by the decorator
    """
    broker = BrokerContext.broker()
    return await asyncio.to_thread(broker.get_binding, instance_id, binding_id)
