"""One-class-per-file domain models re-exported by ``azure_providers.base.models``."""
