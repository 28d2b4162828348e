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

"""awslabs Atlas Service Broker MCP Server implementation."""

import argparse
import awslabs.atlas_service_broker.resources  # noqa: F401 - imported for side effects to register resources
import awslabs.atlas_service_broker.tools  # noqa: F401 - imported for side effects to register tools
import os
import sys
from awslabs.atlas_service_broker.broker import Broker
from awslabs.atlas_service_broker.common.connection import AtlasConnectionManager
from awslabs.atlas_service_broker.common.context import BrokerContext
from awslabs.atlas_service_broker.common.server import SERVER_VERSION, mcp
from loguru import logger


def main():
    """Run the MCP server with CLI argument support."""
    parser = argparse.ArgumentParser(
        description='An AWS Labs MCP server acting as a service broker for MongoDB Atlas clusters'
    )
    parser.add_argument('--port', type=int, default=8888, help='Port to run the server on')
    parser.add_argument(
        '--base-url',
        type=str,
        default=None,
        help='Base URL of the Atlas Admin API (defaults to ATLAS_BASE_URL or the public API)',
    )
    parser.add_argument(
        '--group-id',
        type=str,
        default=None,
        help='Atlas project ID clusters are created in (defaults to ATLAS_GROUP_ID)',
    )

    args = parser.parse_args()
    logger.remove()
    logger.add(sys.stderr, level=os.environ.get('FASTMCP_LOG_LEVEL', 'INFO'))

    # init Atlas client and broker context
    client = AtlasConnectionManager.create_client(base_url=args.base_url, group_id=args.group_id)
    BrokerContext.initialize(Broker(client))

    # config server port
    mcp.settings.port = args.port

    # logger info
    logger.info(f'Starting Atlas Service Broker MCP Server v{SERVER_VERSION}')
    logger.info(f'Atlas API: {client.base_url}')
    logger.info(f'Atlas project: {client.group_id}')

    try:
        mcp.run()
    finally:
        client.close()


if __name__ == '__main__':
    main()
