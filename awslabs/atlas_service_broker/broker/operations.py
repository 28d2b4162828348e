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

"""Progress reporting for asynchronous cluster operations."""

from ..atlas.client import AtlasClient
from ..common.utils import normalize_cluster_name
from ..constants import (
    CLUSTER_STATE_CREATING,
    CLUSTER_STATE_DELETED,
    CLUSTER_STATE_IDLE,
    CLUSTER_STATE_REPAIRING,
    CLUSTER_STATE_UPDATING,
    ERROR_UNKNOWN_OPERATION,
    OPERATION_DEPROVISION,
    OPERATIONS,
)
from ..exceptions import BackendError, ClusterNotFound, ValidationError
from ..models import Cluster, LastOperation, OperationState
from loguru import logger
from typing import Optional


TRANSIENT_STATES = (CLUSTER_STATE_CREATING, CLUSTER_STATE_UPDATING, CLUSTER_STATE_REPAIRING)


def operation_state(operation: str, cluster: Optional[Cluster]) -> OperationState:
    """Derive the state of an operation from the cluster Atlas reports.

    Args:
        operation: One of provision, update or deprovision
        cluster: The cluster, or None if Atlas doesn't know it

    Returns:
        The state to report to the platform
    """
    if operation == OPERATION_DEPROVISION:
        if cluster is None or cluster.state_name == CLUSTER_STATE_DELETED:
            return OperationState.SUCCEEDED
        return OperationState.IN_PROGRESS

    if cluster is None:
        return OperationState.FAILED
    if cluster.state_name == CLUSTER_STATE_IDLE:
        return OperationState.SUCCEEDED
    if cluster.state_name in TRANSIENT_STATES:
        return OperationState.IN_PROGRESS
    return OperationState.FAILED


class OperationTracker:
    """Answers last-operation polls by asking Atlas for the cluster's state.

    Nothing is remembered between polls: the cluster name is derived from the
    instance ID and the platform sends back the operation it was given, so
    every poll re-derives the answer and can be repeated any number of times.
    """

    def __init__(self, client: AtlasClient):
        """Initialize the tracker.

        Args:
            client: Client for the Atlas project clusters live in
        """
        self.client = client

    def last_operation(self, instance_id: str, operation: str) -> LastOperation:
        """Report the progress of an operation on an instance.

        Args:
            instance_id: The instance ID assigned by the platform
            operation: The operation data returned when the operation started

        Raises:
            ValidationError: If the operation is not one this broker hands out
        """
        if operation not in OPERATIONS:
            raise ValidationError(ERROR_UNKNOWN_OPERATION.format(operation))

        cluster_name = normalize_cluster_name(instance_id)
        try:
            cluster: Optional[Cluster] = self.client.get_cluster(cluster_name)
        except ClusterNotFound:
            cluster = None
        except BackendError as e:
            logger.error(f'Failed to get cluster {cluster_name} while polling {operation}: {e}')
            return LastOperation(state=OperationState.FAILED, description=e.message)

        state = operation_state(operation, cluster)
        logger.debug(
            f'Operation {operation} on cluster {cluster_name} is {state.value} '
            f'(cluster state {cluster.state_name if cluster else "not found"})'
        )
        return LastOperation(state=state, description=_describe(operation, cluster_name, cluster))


def _describe(operation: str, cluster_name: str, cluster: Optional[Cluster]) -> str:
    if cluster is None:
        return f'Cluster {cluster_name} does not exist'
    if operation != OPERATION_DEPROVISION and cluster.state_name == CLUSTER_STATE_IDLE:
        return f'Cluster {cluster_name} is ready'
    return f'Cluster {cluster_name} is {(cluster.state_name or "in an unknown state").lower()}'
