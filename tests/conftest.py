"""Shared test fixtures for rolegate."""

import logging

import pytest

from rolegate.cache import CacheRegistry, MemoryCache
from rolegate.config.models import AuthorizerConfig, RolegateConfig

ACL_INI = """\
; blog rules
[Posts]
view,index = editor
* = admin

[Blog.admin/Articles]
edit, publish = Editor, ghost
archive =
* = Reader

[admin/Users]
index = *

[Tags]
list = nobody
"""

ROLES = {"Admin": 1, "editor": 2, "reader": 3}


@pytest.fixture
def acl_text():
    return ACL_INI


@pytest.fixture
def acl_file(tmp_path):
    path = tmp_path / "acl.ini"
    path.write_text(ACL_INI)
    return path


@pytest.fixture
def make_config(acl_file):
    def _make(**authorizer_options) -> RolegateConfig:
        authorizer_options.setdefault("acl_file", str(acl_file))
        return RolegateConfig(
            authorizer=AuthorizerConfig(**authorizer_options),
            roles={"Roles": dict(ROLES)},
        )

    return _make


@pytest.fixture
def sample_config(make_config):
    return make_config()


@pytest.fixture
def memory_cache():
    return MemoryCache()


@pytest.fixture
def caches(memory_cache):
    return CacheRegistry({"default": memory_cache})


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """configure_logging() swaps root handlers; put them back after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
