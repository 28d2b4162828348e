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

"""Resource for the service catalog."""

from ...common.context import BrokerContext
from ...common.decorator import handle_exceptions
from ...common.server import mcp
from ...common.utils import format_broker_response
from ...constants import RESOURCE_CATALOG
from loguru import logger
from typing import Any, Dict


GET_CATALOG_RESOURCE_DESCRIPTION = """Get the service catalog offered by the broker.

<use_case>
Use this resource to find the service and plan IDs that Provision, UpdateInstance and Bind expect.
</use_case>

<important_notes>
1. There is one service per cloud provider (AWS, GCP and AZURE)
2. Each plan of a service is one Atlas instance size, e.g. M10
3. Plans can be changed with UpdateInstance
4. Bindings can't be retrieved after creation
</important_notes>

## Response structure
Returns a JSON document with a `services` list. Each service has:
- `id`, `name` and `description`
- `bindable`, `plan_updateable`, `instances_retrievable` and `bindings_retrievable`
- `plans`: the plans of the service, each with `id`, `name` and `description`
"""


@mcp.resource(
    uri=RESOURCE_CATALOG,
    name='GetCatalog',
    description=GET_CATALOG_RESOURCE_DESCRIPTION,
    mime_type='application/json',
)
@handle_exceptions
async def get_service_catalog() -> Dict[str, Any]:
    """Get the service catalog.

    Returns:
        Dict[str, Any]: The services and their plans
    """
    logger.info('Getting the service catalog')
    services = BrokerContext.broker().services()
    return {'services': [format_broker_response(service) for service in services]}
