from __future__ import annotations

# GH / API operations
GH_TIMEOUT_SECONDS = 60.0

# Idempotent GH read retry policy; writes (comments) are never retried.
GH_READ_RETRY_ATTEMPTS = 3
GH_READ_RETRY_DELAY_SECONDS = 1.0

# Releases per page when walking the version catalog.
GH_CATALOG_PAGE_SIZE = 100
