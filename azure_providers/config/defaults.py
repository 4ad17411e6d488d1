"""azure_providers.config.defaults
==============================

Central place for small, stable default values used across the
azure_providers package. These defaults can be overridden via environment
variables or an external configuration file, but provide sensible fallbacks
for local development and tests.

Module Purpose
--------------
- Provide a single import location for conservative default constants (no I/O).
- Keep adapter modules free of magic literals.

This module intentionally avoids importing from other packages to prevent
circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

# ---- Provider identity ----
AZURE_OPENAI_PROVIDER_ID = "azure_openai"
AZURE_OPENAI_PROVIDER_NAME = "Azure OpenAI"

# ---- Wire defaults ----
# API version used when neither settings nor credentials carry one.
AZURE_OPENAI_DEFAULT_API_VERSION = "2024-08-01-preview"

# Injected when a request carries no system message.
AZURE_OPENAI_DEFAULT_SYSTEM_MESSAGE = (
    "Formatting re-enabled - please enclose code blocks with appropriate Markdown tags."
)

# Sampling temperature used when the caller does not provide one.
AZURE_OPENAI_DEFAULT_TEMPERATURE = 1.0

# Label recorded alongside the secret in the credential store.
AZURE_OPENAI_CREDENTIAL_LABEL = "api-key"

# ---- Model family quirks ----
# Model id prefixes that select the reasoning family.
REASONING_MODEL_PREFIXES = ("o1", "o3")
# Model id prefixes that reject ``stream=true`` and tool definitions.
NON_STREAMING_MODEL_PREFIXES = ("o1",)
# Deployments that reject ``stream=true`` regardless of the model id.
NON_STREAMING_DEPLOYMENTS = frozenset({"o1", "o1-preview", "o1-mini"})
# Deployment that receives a constant ``reasoning_effort``.
REASONING_EFFORT_DEPLOYMENT = "o3-mini"
REASONING_EFFORT_VALUE = "high"

# ---- Concurrency ----
# Simultaneous in-flight HTTP requests per provider instance.
AZURE_OPENAI_MAX_CONCURRENT_REQUESTS = 4


__all__ = [
    "AZURE_OPENAI_PROVIDER_ID",
    "AZURE_OPENAI_PROVIDER_NAME",
    "AZURE_OPENAI_DEFAULT_API_VERSION",
    "AZURE_OPENAI_DEFAULT_SYSTEM_MESSAGE",
    "AZURE_OPENAI_DEFAULT_TEMPERATURE",
    "AZURE_OPENAI_CREDENTIAL_LABEL",
    "REASONING_MODEL_PREFIXES",
    "NON_STREAMING_MODEL_PREFIXES",
    "NON_STREAMING_DEPLOYMENTS",
    "REASONING_EFFORT_DEPLOYMENT",
    "REASONING_EFFORT_VALUE",
    "AZURE_OPENAI_MAX_CONCURRENT_REQUESTS",
]
