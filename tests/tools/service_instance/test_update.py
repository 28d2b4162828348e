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

"""Tests for the UpdateInstance tool."""

import pytest
from awslabs.atlas_service_broker.exceptions import ClusterNotFound
from awslabs.atlas_service_broker.tools.service_instance.update import update_instance


INSTANCE_ID = '6b2a3c1e-1f0e-4c1a-9d4e-2b7f5a9c0d11'


class TestUpdateInstance:
    """Test cases for the UpdateInstance tool."""

    @pytest.mark.asyncio
    async def test_update_success(
        self, mock_broker_context, mock_atlas_client, mock_asyncio_thread
    ):
        """Test a successful plan change."""
        result = await update_instance(
            instance_id=INSTANCE_ID,
            service_id='aosb-cluster-service-aws',
            plan_id='aosb-cluster-plan-aws-m40',
        )

        assert result['message'] == f'Update of instance {INSTANCE_ID} has started'
        assert result['operation'] == 'update'
        _, cluster = mock_atlas_client.update_cluster.call_args.args
        assert cluster.provider_settings.instance_size_name == 'M40'

    @pytest.mark.asyncio
    async def test_update_missing_instance(
        self, mock_broker_context, mock_atlas_client, mock_asyncio_thread
    ):
        """Test that updating a missing cluster reports a gone instance."""
        mock_atlas_client.update_cluster.side_effect = ClusterNotFound(
            'Atlas error: No cluster', 'CLUSTER_NOT_FOUND', 404
        )

        result = await update_instance(
            instance_id=INSTANCE_ID,
            service_id='aosb-cluster-service-aws',
        )

        assert result['error'] == 'InstanceDoesNotExist'
        assert result['status'] == 410
        assert result['cause'] == 'Atlas error: No cluster'
