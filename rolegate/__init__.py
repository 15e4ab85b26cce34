"""rolegate: role-based access control driven by a single acl.ini file."""

from rolegate.acl import AccessTable, AuthorizationRequest, ResourceDescriptor
from rolegate.authorizer import Authorizer
from rolegate.errors import ConfigError

__all__ = [
    "AccessTable",
    "AuthorizationRequest",
    "Authorizer",
    "ConfigError",
    "ResourceDescriptor",
]
