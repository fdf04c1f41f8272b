"""Guarded, chainable callback invocation.

The core (`invokekit.invoker`, `invokekit.guards`) depends only on the standard
library. Config loading and logging setup live in `invokekit.settings` and are not
imported here, so `import invokekit` never pulls in the YAML stack.
"""

from invokekit.guards import InvokerPreconditionError, has_text, is_instance_of, is_not_empty
from invokekit.invoker import (
    INSTANCE,
    ConditionalInvoker,
    accept_both_if_condition,
    accept_both_if_has_text,
    accept_both_if_not_none,
    accept_if_condition,
    accept_if_has_text,
    accept_if_instance_of,
    accept_if_not_empty,
    accept_if_not_none,
)

__version__ = "0.1.0"
__all__ = [
    "INSTANCE",
    "ConditionalInvoker",
    "InvokerPreconditionError",
    "accept_both_if_condition",
    "accept_both_if_has_text",
    "accept_both_if_not_none",
    "accept_if_condition",
    "accept_if_has_text",
    "accept_if_instance_of",
    "accept_if_not_empty",
    "accept_if_not_none",
    "has_text",
    "is_instance_of",
    "is_not_empty",
]
