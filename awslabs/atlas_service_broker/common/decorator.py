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

"""Decorators used by the Atlas Service Broker."""

from ..constants import ERROR_UNEXPECTED
from ..exceptions import BackendError, BrokerException
from functools import wraps
from inspect import iscoroutinefunction
from loguru import logger
from typing import Any, Callable, Dict


def format_error_response(error: BrokerException, operation: str) -> Dict[str, Any]:
    """Render a broker exception the way the broker protocol reports failures.

    Args:
        error: The exception raised by the broker
        operation: Name of the operation that failed

    Returns:
        Error dictionary with the protocol error code, description and status
    """
    response = {
        'error': error.error_code,
        'description': error.message,
        'status': int(error.status_code),
        'operation': operation,
    }
    if error.__cause__ is not None:
        response['cause'] = str(error.__cause__)
    return response


def handle_exceptions(func: Callable) -> Callable:
    """Decorator to handle exceptions in MCP operations.

    Wraps the function in a try-catch block and returns any exceptions
    in a standardized error format.

    Args:
        func: The function to wrap

    Returns:
        The wrapped function that handles exceptions
    """

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any):
        try:
            if iscoroutinefunction(func):
                # If the decorated function is a coroutine, await it
                return await func(*args, **kwargs)
            return func(*args, **kwargs)
        except BackendError as error:
            logger.error(
                f'Failed with Atlas error {error.atlas_error_code} '
                f'({error.http_status}): {error.message}'
            )
            return format_error_response(error, func.__name__)
        except BrokerException as error:
            logger.warning(f'{func.__name__} rejected with {error.error_code}: {error.message}')
            return format_error_response(error, func.__name__)
        except Exception as error:
            logger.exception(f'Failed with unexpected error: {str(error)}')

            # general exceptions
            return {
                'error': ERROR_UNEXPECTED.format(str(error)),
                'error_type': type(error).__name__,
                'error_message': str(error),
                'operation': func.__name__,
            }

    return wrapper
