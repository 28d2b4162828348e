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

"""Generation of binding passwords."""

import base64
import secrets
from ..constants import ERROR_SECRET_GENERATION, PASSWORD_ENTROPY_BYTES
from ..exceptions import SecretGenerationFailed


def generate_password() -> str:
    """Generate a cryptographically secure password.

    The password is 32 random bytes from the operating system's secure source,
    URL-safe base64 encoded so it can be embedded in a URI as is.

    Raises:
        SecretGenerationFailed: If the operating system has no usable random source
    """
    try:
        entropy = secrets.token_bytes(PASSWORD_ENTROPY_BYTES)
    except (NotImplementedError, OSError) as e:
        raise SecretGenerationFailed(ERROR_SECRET_GENERATION) from e
    return base64.urlsafe_b64encode(entropy).decode('ascii')
