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

"""Orchestration of the service broker lifecycle against Atlas."""

from ..atlas.client import AtlasClient
from ..common.utils import normalize_cluster_name
from ..constants import OPERATION_DEPROVISION, OPERATION_PROVISION, OPERATION_UPDATE
from ..exceptions import (
    AsyncRequired,
    BackendError,
    BindingAlreadyExists,
    BindingDoesNotExist,
    BrokerException,
    ClusterAlreadyExists,
    ClusterNotFound,
    InstanceAlreadyExists,
    InstanceDoesNotExist,
    NotRetrievable,
    UserAlreadyExists,
    UserNotFound,
)
from ..models import (
    Binding,
    ConnectionDetails,
    DeprovisionServiceSpec,
    LastOperation,
    ProvisionedServiceSpec,
    Service,
    UnbindSpec,
    UpdateServiceSpec,
)
from . import catalog
from .connection_string import build_connection_string
from .credentials import generate_password
from .operations import OperationTracker
from .params import (
    RawParameters,
    cluster_from_params,
    connection_string_params_from_params,
    user_from_params,
)
from loguru import logger
from typing import List, NoReturn, Optional


BACKEND_ERROR_TRANSLATIONS = (
    (ClusterNotFound, InstanceDoesNotExist),
    (ClusterAlreadyExists, InstanceAlreadyExists),
    (UserNotFound, BindingDoesNotExist),
    (UserAlreadyExists, BindingAlreadyExists),
)


def translate_backend_error(error: BackendError) -> BrokerException:
    """Map an Atlas error to the broker protocol error it stands for.

    The Atlas error is kept as the cause. Errors without a protocol
    counterpart are returned unchanged.
    """
    for backend_type, broker_type in BACKEND_ERROR_TRANSLATIONS:
        if isinstance(error, backend_type):
            translated = broker_type()
            translated.__cause__ = error
            return translated
    return error


class Broker:
    """Service broker for MongoDB Atlas clusters.

    Every call is derived from its arguments plus the current state in Atlas;
    the broker keeps no state of its own between calls.
    """

    def __init__(self, client: AtlasClient):
        """Initialize the broker.

        Args:
            client: Client for the Atlas project clusters and users are managed in
        """
        self.client = client
        self.tracker = OperationTracker(client)

    def services(self) -> List[Service]:
        """Return the service catalog."""
        return catalog.services()

    def provision(
        self,
        instance_id: str,
        service_id: str,
        plan_id: str,
        parameters: RawParameters = None,
        accepts_incomplete: bool = True,
    ) -> ProvisionedServiceSpec:
        """Start creating the cluster for a new service instance."""
        logger.info(f'Provisioning instance {instance_id} (service {service_id}, plan {plan_id})')

        # Cluster creation takes minutes, so the platform has to poll.
        if not accepts_incomplete:
            raise AsyncRequired()

        plan = catalog.resolve_plan(service_id, plan_id)
        cluster = cluster_from_params(
            instance_id,
            plan.provider_name,
            plan.instance_size_name,
            parameters,
            default_region=plan.default_region,
        )

        try:
            created = self.client.create_cluster(cluster)
        except BackendError as e:
            logger.error(
                f'Failed to create cluster {cluster.name} for instance {instance_id}: {e}'
            )
            raise translate_backend_error(e)

        logger.success(f'Started creating cluster {created.name} for instance {instance_id}')
        return ProvisionedServiceSpec(
            operation=OPERATION_PROVISION,
            dashboard_url=self.client.dashboard_url(created.name or cluster.name),
        )

    def update(
        self,
        instance_id: str,
        service_id: str,
        plan_id: Optional[str] = None,
        parameters: RawParameters = None,
        accepts_incomplete: bool = True,
    ) -> UpdateServiceSpec:
        """Start modifying the cluster of a service instance.

        Without a plan ID the instance size is left as it is.
        """
        logger.info(f'Updating instance {instance_id} (service {service_id}, plan {plan_id})')

        if not accepts_incomplete:
            raise AsyncRequired()

        provider = catalog.find_provider_by_service_id(service_id)
        instance_size = None
        if plan_id:
            instance_size = catalog.find_instance_size_by_plan_id(provider, plan_id)
        cluster = cluster_from_params(instance_id, provider, instance_size, parameters)

        try:
            updated = self.client.update_cluster(cluster.name, cluster)
        except BackendError as e:
            logger.error(
                f'Failed to update cluster {cluster.name} for instance {instance_id}: {e}'
            )
            raise translate_backend_error(e)

        logger.success(f'Started updating cluster {updated.name} for instance {instance_id}')
        return UpdateServiceSpec(
            operation=OPERATION_UPDATE,
            dashboard_url=self.client.dashboard_url(updated.name or cluster.name),
        )

    def deprovision(
        self, instance_id: str, accepts_incomplete: bool = True
    ) -> DeprovisionServiceSpec:
        """Start terminating the cluster of a service instance."""
        logger.info(f'Deprovisioning instance {instance_id}')

        if not accepts_incomplete:
            raise AsyncRequired()

        cluster_name = normalize_cluster_name(instance_id)
        try:
            self.client.delete_cluster(cluster_name)
        except BackendError as e:
            logger.error(
                f'Failed to delete cluster {cluster_name} for instance {instance_id}: {e}'
            )
            raise translate_backend_error(e)

        logger.success(f'Started deleting cluster {cluster_name} for instance {instance_id}')
        return DeprovisionServiceSpec(operation=OPERATION_DEPROVISION)

    def last_operation(self, instance_id: str, operation: str) -> LastOperation:
        """Report the progress of a provision, update or deprovision."""
        return self.tracker.last_operation(instance_id, operation)

    def bind(
        self,
        instance_id: str,
        binding_id: str,
        service_id: str,
        plan_id: str,
        parameters: RawParameters = None,
    ) -> Binding:
        """Create a database user with the binding ID as its username.

        The generated password is returned to the caller and nowhere else.
        Everything that can fail on the caller's input happens before the user
        is created, so a rejected request leaves nothing behind in Atlas.
        """
        logger.info(f'Creating binding {binding_id} for instance {instance_id}')

        # Bindings don't depend on the plan, but the IDs still have to be in the catalog.
        catalog.resolve_plan(service_id, plan_id)

        cluster_name = normalize_cluster_name(instance_id)
        try:
            cluster = self.client.get_cluster(cluster_name)
        except BackendError as e:
            logger.error(f'Failed to get cluster {cluster_name} for instance {instance_id}: {e}')
            raise translate_backend_error(e)

        password = generate_password()
        user = user_from_params(binding_id, password, parameters)
        connection_string_params = connection_string_params_from_params(parameters)
        connection_string = build_connection_string(
            connection_string_params, cluster, binding_id, password
        )

        try:
            self.client.create_user(user)
        except BackendError as e:
            logger.error(
                f'Failed to create database user {binding_id} for instance {instance_id}: {e}'
            )
            raise translate_backend_error(e)

        logger.success(f'Created database user {binding_id} on cluster {cluster_name}')
        return Binding(
            credentials=ConnectionDetails(
                username=binding_id,
                password=password,
                uri=cluster.srv_address,
                connection_string=connection_string,
            )
        )

    def unbind(self, instance_id: str, binding_id: str) -> UnbindSpec:
        """Delete the database user of a binding."""
        logger.info(f'Releasing binding {binding_id} of instance {instance_id}')

        cluster_name = normalize_cluster_name(instance_id)
        try:
            self.client.get_cluster(cluster_name)
            self.client.delete_user(binding_id)
        except BackendError as e:
            logger.error(f'Failed to release binding {binding_id} of instance {instance_id}: {e}')
            raise translate_backend_error(e)

        logger.success(f'Deleted database user {binding_id} of cluster {cluster_name}')
        return UnbindSpec()

    def get_binding(self, instance_id: str, binding_id: str) -> NoReturn:
        """Fetch the credentials of an existing binding.

        Passwords are never stored, so this always fails.

        Raises:
            NotRetrievable: Always
        """
        logger.info(f'Retrieving binding {binding_id} of instance {instance_id}')
        raise NotRetrievable(binding_id)
