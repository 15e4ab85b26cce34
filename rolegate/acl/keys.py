"""Conversion between ResourceDescriptor and the flat ``[plugin.][prefix/]controller`` key."""

from __future__ import annotations

from rolegate.acl.models import ResourceDescriptor

PLUGIN_SEPARATOR = "."
PREFIX_SEPARATOR = "/"


def encode(descriptor: ResourceDescriptor) -> str:
    key = descriptor.controller
    if descriptor.prefix:
        key = f"{descriptor.prefix}{PREFIX_SEPARATOR}{key}"
    if descriptor.plugin:
        key = f"{descriptor.plugin}{PLUGIN_SEPARATOR}{key}"
    return key


def decode(key: str) -> ResourceDescriptor:
    """Split a section key into its parts.

    The plugin separator is looked for before the prefix separator, so
    ``Plugin.admin/Users`` yields plugin ``Plugin``, prefix ``admin`` and
    controller ``Users``. No character validation is done.
    """
    plugin = prefix = None
    if PLUGIN_SEPARATOR in key:
        plugin, key = key.split(PLUGIN_SEPARATOR, 1)
    if PREFIX_SEPARATOR in key:
        prefix, key = key.split(PREFIX_SEPARATOR, 1)
    return ResourceDescriptor(plugin=plugin, prefix=prefix, controller=key)
