"""acl.ini parsing, compilation and resource key handling."""

from rolegate.acl.compiler import compile_rules
from rolegate.acl.keys import decode, encode
from rolegate.acl.models import (
    WILDCARD,
    AccessTable,
    AuthorizationRequest,
    ResourceDescriptor,
    ResourceRules,
    RoleMap,
)
from rolegate.acl.parser import parse, parse_file

__all__ = [
    "WILDCARD",
    "AccessTable",
    "AuthorizationRequest",
    "ResourceDescriptor",
    "ResourceRules",
    "RoleMap",
    "compile_rules",
    "decode",
    "encode",
    "parse",
    "parse_file",
]
