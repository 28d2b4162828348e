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

"""Tests for the Provision tool."""

import json
import pytest
from awslabs.atlas_service_broker.tools.service_instance.provision import provision_instance


INSTANCE_ID = '6b2a3c1e-1f0e-4c1a-9d4e-2b7f5a9c0d11'


class TestProvisionInstance:
    """Test cases for the Provision tool."""

    @pytest.mark.asyncio
    async def test_provision_success(
        self, mock_broker_context, mock_atlas_client, mock_asyncio_thread
    ):
        """Test successful provisioning."""
        result = await provision_instance(
            instance_id=INSTANCE_ID,
            service_id='aosb-cluster-service-aws',
            plan_id='aosb-cluster-plan-aws-m10',
            parameters=json.dumps({'cluster': {'backupEnabled': True}}),
        )

        assert result['message'] == f'Provisioning of instance {INSTANCE_ID} has started'
        assert result['is_async'] is True
        assert result['operation'] == 'provision'
        assert result['dashboard_url'].endswith(INSTANCE_ID[:23])
        mock_asyncio_thread.assert_called_once()

        cluster = mock_atlas_client.create_cluster.call_args.args[0]
        assert cluster.backup_enabled is True

    @pytest.mark.asyncio
    async def test_provision_requires_async(self, mock_broker_context, mock_asyncio_thread):
        """Test that a caller that can't poll gets an AsyncRequired error."""
        result = await provision_instance(
            instance_id=INSTANCE_ID,
            service_id='aosb-cluster-service-aws',
            plan_id='aosb-cluster-plan-aws-m10',
            accepts_incomplete=False,
        )

        assert result['error'] == 'AsyncRequired'
        assert result['status'] == 422

    @pytest.mark.asyncio
    async def test_provision_unknown_service(self, mock_broker_context, mock_asyncio_thread):
        """Test that an unknown service is reported as a validation error."""
        result = await provision_instance(
            instance_id=INSTANCE_ID,
            service_id='unknown',
            plan_id='aosb-cluster-plan-aws-m10',
        )

        assert result['error'] == 'ValidationError'
        assert result['status'] == 400

    @pytest.mark.asyncio
    async def test_provision_malformed_parameters(self, mock_broker_context, mock_asyncio_thread):
        """Test that malformed parameters are reported."""
        result = await provision_instance(
            instance_id=INSTANCE_ID,
            service_id='aosb-cluster-service-aws',
            plan_id='aosb-cluster-plan-aws-m10',
            parameters='{"cluster": ',
        )

        assert result['error'] == 'MalformedParameters'

    @pytest.mark.asyncio
    async def test_provision_without_broker(self, mock_asyncio_thread):
        """Test that calling the tool before startup is reported."""
        from awslabs.atlas_service_broker.common.context import BrokerContext
        from unittest.mock import patch

        with patch.object(BrokerContext, '_broker', None):
            result = await provision_instance(
                instance_id=INSTANCE_ID,
                service_id='aosb-cluster-service-aws',
                plan_id='aosb-cluster-plan-aws-m10',
            )

        assert result['error'] == 'ConfigurationError'
