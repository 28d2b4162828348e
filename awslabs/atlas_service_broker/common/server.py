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

"""Common MCP server configuration."""

from mcp.server.fastmcp import FastMCP

SERVER_VERSION = '0.1.0'

SERVER_INSTRUCTIONS = """
This server is a service broker for MongoDB Atlas. It provisions, updates and deprovisions
Atlas clusters and manages per-application database credentials ("bindings") on them.

Key capabilities:
- Instance Lifecycle: Provision, update and deprovision clusters for a catalog service and plan
- Operation Polling: Report whether a provision, update or deprovision has finished
- Bindings: Create a database user with a generated password and return its connection string,
  or delete it again
- Catalog: List the services (one per cloud provider) and plans (one per instance size)

Cluster operations are asynchronous. Every provision, update and deprovision returns an
operation name that must be passed to LastOperation until it reports "succeeded" or "failed".

Binding credentials are returned exactly once and can't be fetched again later.
"""

SERVER_DEPENDENCIES = ['httpx', 'pydantic', 'loguru']

# FastMCP instance
mcp = FastMCP(
    'awslabs.atlas-service-broker',
    instructions=SERVER_INSTRUCTIONS,
    dependencies=SERVER_DEPENDENCIES,
)
