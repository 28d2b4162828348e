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

"""Global pytest fixtures for Atlas Service Broker tests."""

import os
import pytest
from awslabs.atlas_service_broker.atlas.client import AtlasClient
from awslabs.atlas_service_broker.broker import Broker
from awslabs.atlas_service_broker.common.context import BrokerContext
from awslabs.atlas_service_broker.models import Cluster, ProviderSettings
from unittest.mock import MagicMock, patch


INSTANCE_ID = '6b2a3c1e-1f0e-4c1a-9d4e-2b7f5a9c0d11'
CLUSTER_NAME = INSTANCE_ID[:23]
BINDING_ID = 'b7c9e2d4-binding'
AWS_SERVICE_ID = 'aosb-cluster-service-aws'
AWS_M10_PLAN_ID = 'aosb-cluster-plan-aws-m10'


@pytest.fixture(scope='session', autouse=True)
def tests_setup_and_teardown():
    """Mock environment and module variables for testing."""
    # Will be executed before the first test
    old_environ = dict(os.environ)
    os.environ.update(
        {
            'ATLAS_GROUP_ID': 'mock-group-id',
            'ATLAS_PUBLIC_KEY': 'mock_public_key',  # pragma: allowlist secret
            'ATLAS_PRIVATE_KEY': 'mock_private_key',  # pragma: allowlist secret
        }
    )

    yield
    # Will be executed after the last test
    os.environ.clear()
    os.environ.update(old_environ)


@pytest.fixture
def sample_cluster():
    """Cluster as Atlas reports it once it is ready."""
    return Cluster(
        name=CLUSTER_NAME,
        state_name='IDLE',
        srv_address='mongodb+srv://cluster0.abcde.mongodb.net',
        mongo_uri='mongodb://host1:27017,host2:27017',
        mongo_uri_with_options='mongodb://host1,host2/?ssl=true',
        provider_settings=ProviderSettings(
            provider_name='AWS', instance_size_name='M10', region_name='US_EAST_1'
        ),
    )


@pytest.fixture
def mock_atlas_client(sample_cluster):
    """Fixture providing a mock Atlas client.

    Cluster calls answer with the sample cluster; user and delete calls succeed.
    """
    mock_client = MagicMock(spec=AtlasClient)
    mock_client.get_cluster.return_value = sample_cluster
    mock_client.create_cluster.side_effect = lambda cluster: cluster.model_copy(
        update={'state_name': 'CREATING'}
    )
    mock_client.update_cluster.side_effect = lambda name, cluster: cluster.model_copy(
        update={'state_name': 'UPDATING'}
    )
    mock_client.delete_cluster.return_value = None
    mock_client.create_user.side_effect = lambda user: user
    mock_client.delete_user.return_value = None
    mock_client.dashboard_url.side_effect = (
        lambda name: f'https://cloud.mongodb.com/v2/mock-group-id#clusters/detail/{name}'
    )
    return mock_client


@pytest.fixture
def broker(mock_atlas_client):
    """Broker talking to the mock Atlas client."""
    return Broker(mock_atlas_client)


@pytest.fixture
def mock_broker_context(broker):
    """Install the broker in the context used by tools and resources."""
    with patch.object(BrokerContext, '_broker', broker):
        yield broker


@pytest.fixture
def mock_asyncio_thread():
    """Mock asyncio.to_thread to call the function inline."""

    def run_inline(func, *args, **kwargs):
        return func(*args, **kwargs)

    with patch('asyncio.to_thread', side_effect=run_inline) as mock:
        yield mock
