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

"""Service catalog: one service per cloud provider, one plan per instance size."""

from ..constants import (
    ERROR_UNKNOWN_PLAN,
    ERROR_UNKNOWN_SERVICE,
    PLAN_ID_PREFIX,
    PROVIDER_DEFAULT_REGIONS,
    PROVIDER_DISPLAY_NAMES,
    PROVIDER_INSTANCE_SIZES,
    SERVICE_ID_PREFIX,
    SERVICE_NAME_PREFIX,
)
from ..exceptions import ValidationError
from ..models import PlanConfig, Service, ServicePlan
from typing import List


def build_service_id(provider: str) -> str:
    """Catalog ID of the service for a provider, e.g. aosb-cluster-service-aws."""
    return f'{SERVICE_ID_PREFIX}{provider.lower()}'


def build_plan_id(provider: str, instance_size: str) -> str:
    """Catalog ID of a plan, e.g. aosb-cluster-plan-aws-m10."""
    return f'{PLAN_ID_PREFIX}{provider.lower()}-{instance_size.lower()}'


def services() -> List[Service]:
    """Build the service catalog."""
    return [
        Service(
            id=build_service_id(provider),
            name=f'{SERVICE_NAME_PREFIX}{provider.lower()}',
            description=f'MongoDB Atlas clusters on {PROVIDER_DISPLAY_NAMES[provider]}',
            tags=['mongodb', 'atlas', provider.lower()],
            plans=[
                ServicePlan(
                    id=build_plan_id(provider, size),
                    name=size,
                    description=f'Instance size "{size}"',
                )
                for size in sizes
            ],
        )
        for provider, sizes in PROVIDER_INSTANCE_SIZES.items()
    ]


def find_provider_by_service_id(id: str) -> str:
    """Look up the provider name a service ID belongs to.

    Raises:
        ValidationError: If no service has the ID
    """
    for provider in PROVIDER_INSTANCE_SIZES:
        if build_service_id(provider) == id:
            return provider
    raise ValidationError(ERROR_UNKNOWN_SERVICE.format(id))


def find_instance_size_by_plan_id(provider: str, id: str) -> str:
    """Look up the instance size a plan of the provider's service stands for.

    Raises:
        ValidationError: If the provider's service has no plan with the ID
    """
    for size in PROVIDER_INSTANCE_SIZES.get(provider, []):
        if build_plan_id(provider, size) == id:
            return size
    raise ValidationError(ERROR_UNKNOWN_PLAN.format(id))


def resolve_plan(service_id: str, plan_id: str) -> PlanConfig:
    """Map a service and plan ID to the backend configuration they stand for.

    Raises:
        ValidationError: If either ID is not in the catalog
    """
    provider = find_provider_by_service_id(service_id)
    return PlanConfig(
        provider_name=provider,
        instance_size_name=find_instance_size_by_plan_id(provider, plan_id),
        default_region=PROVIDER_DEFAULT_REGIONS.get(provider),
    )
