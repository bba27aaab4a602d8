from __future__ import annotations

from standards.domain.constants import APP_VERSION

USER_AGENT = f"Standards-CLI/{APP_VERSION}"
DEFAULT_TIMEOUT = 10
