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

"""Tool to create a service binding."""

import asyncio
from ...common.context import BrokerContext
from ...common.decorator import handle_exceptions
from ...common.server import mcp
from ...common.utils import format_broker_response
from ...constants import SUCCESS_BOUND
from pydantic import Field
from typing import Any, Dict, Optional
from typing_extensions import Annotated


BIND_TOOL_DESCRIPTION = """Create a service binding: a database user on the instance's Atlas cluster.

<use_case>
Use this tool to get credentials and a ready-to-use connection string for an application
that needs access to a provisioned service instance.
</use_case>

<important_notes>
1. The binding ID becomes the database username; the password is generated by the broker
2. The password is returned only once and can't be fetched again (GetBinding always fails)
3. The user gets readWriteAnyDatabase on admin unless `parameters` lists other roles, e.g.
   {"user": {"roles": [{"roleName": "read", "databaseName": "app"}]}}
4. The connection string can be shaped with `parameters`, e.g.
   {"connectionString": {"database": "app", "options": {"retryWrites": true}}}
5. Set {"connectionString": {"skipCredentials": true}} to leave the credentials out of the URL
</important_notes>

## Response structure
Returns a dictionary with the following keys:
- `message`: Confirmation that the binding was created
- `credentials`: An object with `username`, `password`, `uri` (SRV address) and `connection_string`
"""


@mcp.tool(
    name='Bind',
    description=BIND_TOOL_DESCRIPTION,
)
@handle_exceptions
async def bind_instance(
    instance_id: Annotated[str, Field(description='The instance ID assigned by the platform')],
    binding_id: Annotated[str, Field(description='The binding ID assigned by the platform')],
    service_id: Annotated[str, Field(description='The catalog service ID')],
    plan_id: Annotated[str, Field(description='The catalog plan ID')],
    parameters: Annotated[
        Optional[str], Field(description='Binding parameters as a JSON object')
    ] = None,
) -> Dict[str, Any]:
    """Create a service binding.

    Args:
        instance_id: The instance ID assigned by the platform
        binding_id: The binding ID assigned by the platform
        service_id: The catalog service ID
        plan_id: The catalog plan ID
        parameters: Binding parameters as a JSON object

    Returns:
        Dict[str, Any]: The binding with its credentials
    """
    broker = BrokerContext.broker()

    response = await asyncio.to_thread(
        broker.bind,
        instance_id,
        binding_id,
        service_id,
        plan_id,
        parameters,
    )

    result = format_broker_response(response)
    result['message'] = SUCCESS_BOUND.format(binding_id)
    return result
